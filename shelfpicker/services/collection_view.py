"""
Collection view: filtering and sorting of merged games.

Sorting is key-based and stable, so games that compare equal keep their
collection order.
"""

import random
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from shelfpicker.models.game import Game
from shelfpicker.services.weighted_random import pick_weighted_random_game


class SortOption(str, Enum):
    """Available orderings of a collection."""

    RATING = "rating"
    USER_RATING = "user-rating"
    NAME = "name"
    YEAR = "year"
    COMPLEXITY = "complexity"
    PLAYS = "plays"
    LAST_PLAYED = "last-played"
    RANDOM = "random"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


DEFAULT_DIRECTIONS: dict[SortOption, SortDirection] = {
    SortOption.RATING: SortDirection.DESC,
    SortOption.USER_RATING: SortDirection.DESC,
    SortOption.NAME: SortDirection.ASC,
    SortOption.YEAR: SortDirection.DESC,
    SortOption.COMPLEXITY: SortDirection.ASC,
    SortOption.PLAYS: SortDirection.DESC,
    SortOption.LAST_PLAYED: SortDirection.DESC,
    SortOption.RANDOM: SortDirection.DESC,
}


@dataclass(frozen=True, slots=True)
class FilterState:
    """
    Active filters. None (or an empty string) disables a filter.

    Attributes:
        player_count: Keep games that support exactly this many players
        min_playtime: Keep games whose longest playtime reaches this
        max_playtime: Keep games whose shortest playtime fits in this
        category: Keep games tagged with this category
        search_query: Case-insensitive substring of the name
    """

    player_count: int | None = None
    min_playtime: int | None = None
    max_playtime: int | None = None
    category: str | None = None
    search_query: str | None = None


def filter_games(games: Iterable[Game], filters: FilterState) -> list[Game]:
    """Apply every active filter, preserving order."""
    result = list(games)

    if filters.player_count is not None:
        count = filters.player_count
        result = [g for g in result if g.players.min <= count <= g.players.max]

    if filters.min_playtime is not None:
        minimum = filters.min_playtime
        result = [g for g in result if g.playtime.max >= minimum]

    if filters.max_playtime is not None:
        maximum = filters.max_playtime
        result = [g for g in result if g.playtime.min <= maximum]

    if filters.category:
        category = filters.category
        result = [g for g in result if category in g.categories]

    if filters.search_query:
        query = filters.search_query.lower()
        result = [g for g in result if query in g.name.lower()]

    return result


def _played_key(game: Game) -> tuple[bool, Any]:
    # Never-played games sort below every dated one
    return (game.last_played is not None, game.last_played or 0)


_SORT_KEYS: dict[SortOption, Callable[[Game], Any]] = {
    SortOption.RATING: lambda g: g.rating.average,
    SortOption.USER_RATING: lambda g: g.user_rating or 0.0,
    SortOption.NAME: lambda g: g.name.casefold(),
    SortOption.YEAR: lambda g: g.year_published or 0,
    SortOption.COMPLEXITY: lambda g: g.weight or 0.0,
    SortOption.PLAYS: lambda g: (g.play_count, *_played_key(g)),
    SortOption.LAST_PLAYED: _played_key,
}


def _random_key(seed: int) -> Callable[[Game], tuple[float, str]]:
    """Stable pseudo-random position per item id; copies of a game stay together."""

    def key(game: Game) -> tuple[float, str]:
        return random.Random(f"{seed}:{game.id}").random(), game.collection_id

    return key


def sort_games(
    games: Iterable[Game],
    option: SortOption,
    direction: SortDirection | None = None,
    seed: int = 0,
) -> list[Game]:
    """
    Sort games by an option.

    Args:
        games: Games to sort
        option: Sort criterion
        direction: Ascending or descending; defaults per option. Ignored
            for random order.
        seed: Seed for random order; the same seed gives the same order

    Returns:
        New sorted list
    """
    if option == SortOption.RANDOM:
        return sorted(games, key=_random_key(seed))

    direction = direction or DEFAULT_DIRECTIONS[option]
    return sorted(games, key=_SORT_KEYS[option], reverse=direction == SortDirection.DESC)


def available_categories(games: Iterable[Game]) -> list[str]:
    """Sorted unique categories across all games."""
    return sorted({category for game in games for category in game.categories})


def pick_another(
    games: Sequence[Game],
    previous: Game | None = None,
    rng: random.Random | None = None,
) -> Game:
    """
    Weighted pick that avoids repeating the previous pick.

    The previous pick is only excluded when something else is left.

    Raises:
        ValueError: If games is empty
    """
    candidates = list(games)
    if previous is not None and len(candidates) > 1:
        remaining = [g for g in candidates if g.collection_id != previous.collection_id]
        candidates = remaining or candidates
    return pick_weighted_random_game(candidates, rng)
