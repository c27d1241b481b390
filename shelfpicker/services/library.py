"""
Game library assembly.

Builds the merged game list for a user from the three BGG sources:
collection (required), game details and plays (both optional). A
failure in an optional source is logged and the games are returned
without that enrichment.
"""

import logging

from shelfpicker.config import settings
from shelfpicker.models.game import Game
from shelfpicker.models.records import CollectionEntry, GameDetail, Play, UserInfo
from shelfpicker.models.result import BggResult, Failure, Ok
from shelfpicker.services.bgg_client import BggClient
from shelfpicker.services.cache import ResultCache, TTLCache
from shelfpicker.services.game_mapper import (
    game_info_to_game,
    map_collection_to_games,
    merge_games_info,
    merge_plays,
)

logger = logging.getLogger(__name__)


class GameLibrary:
    """Cached access to a user's merged game collection."""

    def __init__(self, client: BggClient, cache: ResultCache | None = None) -> None:
        self.client = client
        self.cache = cache if cache is not None else TTLCache()

    async def validate_username(self, username: str) -> BggResult[UserInfo]:
        return await self.cache.get_or_load(
            f"user:{username}",
            settings.cache_ttl_user,
            lambda: self.client.validate_username(username),
        )

    async def _collection(self, username: str) -> BggResult[list[CollectionEntry]]:
        return await self.cache.get_or_load(
            f"collection:{username}",
            settings.cache_ttl_collection,
            lambda: self.client.get_collection(username),
        )

    async def _details(self, game_ids: list[str]) -> BggResult[list[GameDetail]]:
        return await self.cache.get_or_load(
            f"games:{','.join(game_ids)}",
            settings.cache_ttl_game_details,
            lambda: self.client.get_game_details(game_ids),
        )

    async def _plays(self, username: str) -> BggResult[list[Play]]:
        return await self.cache.get_or_load(
            f"plays:{username}",
            settings.cache_ttl_plays,
            lambda: self.client.get_all_plays(username),
        )

    async def load_games(self, username: str) -> BggResult[list[Game]]:
        """
        Load a user's collection merged with details and plays.

        Returns:
            Ok with merged games, or the collection Failure
        """
        collection = await self._collection(username)
        if isinstance(collection, Failure):
            return collection

        games = map_collection_to_games(collection.data)
        if not games:
            return Ok(games)

        # Several collection entries can share one item id
        game_ids = list(dict.fromkeys(game.id for game in games))

        details = await self._details(game_ids)
        if isinstance(details, Failure):
            logger.warning(
                "Game details unavailable for %s (%s): %s",
                username,
                details.kind.value,
                details.error,
            )
        else:
            games = merge_games_info(games, details.data)

        plays = await self._plays(username)
        if isinstance(plays, Failure):
            logger.warning(
                "Plays unavailable for %s (%s): %s", username, plays.kind.value, plays.error
            )
        elif plays.data:
            games = merge_plays(games, plays.data)

        logger.info("Loaded %d games for %s", len(games), username)
        return Ok(games)

    async def get_game(self, game_id: str) -> BggResult[Game]:
        """Load a single game from its detail data alone."""
        detail = await self.cache.get_or_load(
            f"game:{game_id}",
            settings.cache_ttl_game_details,
            lambda: self.client.get_game_detail(game_id),
        )
        if isinstance(detail, Failure):
            return detail
        return Ok(game_info_to_game(detail.data))

    def invalidate_user(self, username: str) -> None:
        """Forget everything cached for a user."""
        for prefix in ("user:", "collection:", "plays:"):
            self.cache.invalidate(f"{prefix}{username}")
