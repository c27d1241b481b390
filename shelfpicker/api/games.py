"""
Game API endpoints.

Looks up a single game by BGG item id, independent of any collection.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response

from shelfpicker.api.dependencies import failure_response, get_library
from shelfpicker.models.failure import ApiResponse
from shelfpicker.models.game import Game
from shelfpicker.models.result import Failure
from shelfpicker.services.library import GameLibrary

router = APIRouter(prefix="/games", tags=["games"])


@router.get("/{game_id}", response_model=ApiResponse[Game])
async def get_game(
    game_id: str,
    response: Response,
    library: Annotated[GameLibrary, Depends(get_library)],
) -> ApiResponse[Any]:
    result = await library.get_game(game_id)
    if isinstance(result, Failure):
        return failure_response(result, response)
    return ApiResponse.success(result.data)
