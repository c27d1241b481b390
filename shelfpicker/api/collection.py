"""
Collection API endpoints.

Serves a user's merged collection, filtered and sorted, and picks a game
to play from it.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, Field

from shelfpicker.api.dependencies import failure_response, get_library
from shelfpicker.models.failure import ApiResponse
from shelfpicker.models.game import Game
from shelfpicker.models.result import Failure, FailureKind
from shelfpicker.services.collection_view import (
    FilterState,
    SortDirection,
    SortOption,
    available_categories,
    filter_games,
    pick_another,
    sort_games,
)
from shelfpicker.services.library import GameLibrary

router = APIRouter(prefix="/collection", tags=["collection"])


class CollectionView(BaseModel):
    """A filtered and sorted view of a user's collection."""

    username: str
    total: int = Field(
        ...,
        description="Number of games in the collection before filtering",
    )
    categories: list[str] = Field(
        default_factory=list,
        description="Every category present in the collection, sorted",
    )
    games: list[Game] = Field(default_factory=list)


class GamePick(BaseModel):
    """A game picked for the user, with the size of the pool it came from."""

    game: Game
    candidates: int


def get_filters(
    players: Annotated[int | None, Query(ge=1)] = None,
    min_playtime: Annotated[int | None, Query(ge=0)] = None,
    max_playtime: Annotated[int | None, Query(ge=0)] = None,
    category: str | None = None,
    q: Annotated[str | None, Query(description="Case-insensitive name search")] = None,
) -> FilterState:
    return FilterState(
        player_count=players,
        min_playtime=min_playtime,
        max_playtime=max_playtime,
        category=category,
        search_query=q,
    )


async def _filtered_sorted(
    library: GameLibrary,
    username: str,
    filters: FilterState,
    sort: SortOption,
    direction: SortDirection | None,
    seed: int,
) -> tuple[list[Game], list[Game]] | Failure:
    result = await library.load_games(username)
    if isinstance(result, Failure):
        return result

    games = result.data
    return games, sort_games(filter_games(games, filters), sort, direction, seed)


@router.get("/{username}", response_model=ApiResponse[CollectionView])
async def get_collection_view(
    username: str,
    response: Response,
    library: Annotated[GameLibrary, Depends(get_library)],
    filters: Annotated[FilterState, Depends(get_filters)],
    sort: SortOption = SortOption.RATING,
    direction: SortDirection | None = None,
    seed: int = 0,
) -> ApiResponse[Any]:
    """
    Get a user's collection.

    Filters combine with AND. Without `direction`, each sort uses its
    natural default (name and complexity ascending, everything else
    descending). `seed` fixes the order of the random sort.
    """
    loaded = await _filtered_sorted(library, username, filters, sort, direction, seed)
    if isinstance(loaded, Failure):
        return failure_response(loaded, response)

    games, view = loaded
    return ApiResponse.success(
        CollectionView(
            username=username,
            total=len(games),
            categories=available_categories(games),
            games=view,
        )
    )


@router.get("/{username}/pick", response_model=ApiResponse[GamePick])
async def pick_game(
    username: str,
    response: Response,
    library: Annotated[GameLibrary, Depends(get_library)],
    filters: Annotated[FilterState, Depends(get_filters)],
    sort: SortOption = SortOption.RATING,
    direction: SortDirection | None = None,
    seed: int = 0,
    exclude: Annotated[
        str | None, Query(description="Collection id of the previous pick")
    ] = None,
) -> ApiResponse[Any]:
    """
    Pick a game to play.

    Games higher in the sorted view are more likely to be picked. Passing
    the previous pick as `exclude` avoids picking it twice in a row.
    """
    loaded = await _filtered_sorted(library, username, filters, sort, direction, seed)
    if isinstance(loaded, Failure):
        return failure_response(loaded, response)

    _, view = loaded
    if not view:
        return failure_response(
            Failure(
                kind=FailureKind.NOT_FOUND,
                error="No games match the current filters",
                retryable=False,
            ),
            response,
        )

    previous = next((g for g in view if g.collection_id == exclude), None)
    return ApiResponse.success(GamePick(game=pick_another(view, previous), candidates=len(view)))
