"""
ShelfPicker services.

BGG access, normalization, and collection browsing.
"""

from shelfpicker.services.bgg_client import BggClient
from shelfpicker.services.cache import ResultCache, TTLCache
from shelfpicker.services.collection_view import (
    DEFAULT_DIRECTIONS,
    FilterState,
    SortDirection,
    SortOption,
    available_categories,
    filter_games,
    pick_another,
    sort_games,
)
from shelfpicker.services.fetcher import (
    FetchError,
    FetchResponse,
    HttpxTransport,
    NetworkUnreachableError,
    ProcessingTimeoutError,
    RetryingFetcher,
    UpstreamUnavailableError,
)
from shelfpicker.services.game_mapper import (
    collection_entry_to_game,
    game_info_to_game,
    map_collection_to_games,
    merge_game_info,
    merge_games_info,
    merge_plays,
)
from shelfpicker.services.library import GameLibrary
from shelfpicker.services.weighted_random import DECAY_FACTOR, pick_weighted_random_game

__all__ = [
    "BggClient",
    "DECAY_FACTOR",
    "DEFAULT_DIRECTIONS",
    "FetchError",
    "FetchResponse",
    "FilterState",
    "GameLibrary",
    "HttpxTransport",
    "NetworkUnreachableError",
    "ProcessingTimeoutError",
    "ResultCache",
    "RetryingFetcher",
    "SortDirection",
    "SortOption",
    "TTLCache",
    "UpstreamUnavailableError",
    "available_categories",
    "collection_entry_to_game",
    "filter_games",
    "game_info_to_game",
    "map_collection_to_games",
    "merge_game_info",
    "merge_games_info",
    "merge_plays",
    "pick_another",
    "pick_weighted_random_game",
    "sort_games",
]
