"""Shared test doubles and canned BGG records."""

import datetime
from collections.abc import Mapping
from typing import Any

from shelfpicker.models.records import (
    CollectionEntry,
    CollectionStats,
    GameDetail,
    Link,
    Play,
    UserInfo,
)
from shelfpicker.models.result import BggResult, Failure, FailureKind, Ok
from shelfpicker.services.fetcher import FetchResponse

PROCESSING = Failure(
    FailureKind.PROCESSING, "still processing", retryable=True, suggested_backoff_seconds=2.0
)


class RecordingSleep:
    """Awaitable stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class ScriptedTransport:
    """Transport replaying a fixed sequence of responses or exceptions."""

    def __init__(self, *outcomes: FetchResponse | Exception) -> None:
        self.outcomes = list(outcomes)
        self.calls = 0

    async def __call__(self, url: str, params: Mapping[str, Any] | None = None) -> FetchResponse:
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class StubClient:
    """
    BggClient stand-in returning canned results and recording calls.

    The username "ghost" and the game id "0" are unknown.
    """

    def __init__(
        self,
        collection: BggResult[list[CollectionEntry]],
        details: BggResult[list[GameDetail]] | None = None,
        plays: BggResult[list[Play]] | None = None,
    ) -> None:
        self.collection = collection
        self.details = details if details is not None else Ok([])
        self.plays = plays if plays is not None else Ok([])
        self.calls: list[tuple[str, Any]] = []

    async def validate_username(self, username: str) -> BggResult[UserInfo]:
        self.calls.append(("user", username))
        if username == "ghost":
            return Failure(FailureKind.NOT_FOUND, 'User "ghost" not found on BoardGameGeek')
        return Ok(UserInfo(id="1", name=username))

    async def get_collection(self, username: str) -> BggResult[list[CollectionEntry]]:
        self.calls.append(("collection", username))
        return self.collection

    async def get_game_details(self, ids: list[str]) -> BggResult[list[GameDetail]]:
        self.calls.append(("details", list(ids)))
        return self.details

    async def get_all_plays(self, username: str) -> BggResult[list[Play]]:
        self.calls.append(("plays", username))
        return self.plays

    async def get_game_detail(self, game_id: str) -> BggResult[GameDetail]:
        self.calls.append(("detail", game_id))
        if game_id == "0":
            return Failure(FailureKind.NOT_FOUND, "Game with ID 0 not found")
        return Ok(GameDetail(object_id=game_id, name="Solo", min_players=1, max_players=1))

    async def aclose(self) -> None:
        self.calls.append(("aclose", None))


def _entry(object_id: str, collection_id: str, name: str) -> CollectionEntry:
    return CollectionEntry(
        object_id=object_id,
        collection_id=collection_id,
        name=name,
        stats=CollectionStats(min_players=2, max_players=4),
    )


# Two copies of Azul and one Brass
ENTRIES = [
    _entry("1", "100", "Azul"),
    _entry("2", "200", "Brass"),
    _entry("1", "101", "Azul"),
]

DETAILS = [
    GameDetail(
        object_id="1",
        name="Azul",
        links=(Link(type="boardgamecategory", id="9", value="Puzzle"),),
    )
]

PLAYS = [
    Play(id="p1", game_id="2", date=datetime.date(2024, 5, 1), quantity=2),
    Play(id="p2", game_id="2", date=datetime.date(2024, 6, 1), quantity=1),
]
