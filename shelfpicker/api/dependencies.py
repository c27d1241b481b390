"""Shared FastAPI dependencies and response helpers."""

from functools import lru_cache
from typing import Any

from fastapi import Response

from shelfpicker.models.failure import ApiResponse, status_code_for
from shelfpicker.models.result import Failure
from shelfpicker.services.bgg_client import BggClient
from shelfpicker.services.library import GameLibrary


@lru_cache(maxsize=1)
def get_library() -> GameLibrary:
    """
    Get the process-wide game library.

    One BGG client (and connection pool) and one cache are shared by all
    requests. Override this dependency in tests.
    """
    return GameLibrary(BggClient())


async def close_library() -> None:
    """Close the shared library's HTTP client, if it was ever created."""
    if get_library.cache_info().currsize:
        await get_library().client.aclose()
        get_library.cache_clear()


def failure_response(failure: Failure, response: Response) -> ApiResponse[Any]:
    """Set the HTTP status for a failure and wrap it in the envelope."""
    response.status_code = status_code_for(failure)
    return ApiResponse.from_failure(failure)
