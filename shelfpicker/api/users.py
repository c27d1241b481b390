"""
User API endpoints.

Checks whether a BGG username exists before loading its collection.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response

from shelfpicker.api.dependencies import failure_response, get_library
from shelfpicker.models.failure import ApiResponse
from shelfpicker.models.records import UserInfo
from shelfpicker.models.result import Failure
from shelfpicker.services.library import GameLibrary

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{username}", response_model=ApiResponse[UserInfo])
async def get_user(
    username: str,
    response: Response,
    library: Annotated[GameLibrary, Depends(get_library)],
) -> ApiResponse[Any]:
    """
    Validate a BGG username.

    Returns the account info, or a not-found failure for unknown users.
    """
    result = await library.validate_username(username)
    if isinstance(result, Failure):
        return failure_response(result, response)
    return ApiResponse.success(result.data)
