"""
Typed records projected from BGG XMLAPI2 payloads.

One record family per endpoint. Values are kept close to what the API
sent: ranks and status flags stay raw so the game mapper owns every
interpretation (e.g. the "Not Ranked" sentinel, "1"/1 flags).
"""

import datetime
from dataclasses import dataclass, field

from shelfpicker.models.xml_node import ScalarValue


@dataclass(frozen=True, slots=True)
class UserInfo:
    """A BGG user account (`/user` endpoint)."""

    id: str
    name: str
    year_registered: int | None = None
    last_login: str | None = None
    country: str | None = None


@dataclass(frozen=True, slots=True)
class RankEntry:
    """
    One rank row from a ratings block.

    Attributes:
        name: Rank family name ("boardgame", "strategygames", ...)
        value: Raw value; an int or the "Not Ranked" sentinel
        friendly_name: Display name ("Board Game Rank")
        type: "subtype" or "family"
    """

    name: str
    value: ScalarValue | None
    friendly_name: str | None = None
    type: str | None = None


@dataclass(frozen=True, slots=True)
class CollectionRating:
    """Ratings block of a collection item, including the user's own rating."""

    value: ScalarValue | None = None  # user's personal rating, "N/A" if unrated
    users_rated: int | None = None
    average: float | None = None
    bayes_average: float | None = None
    stddev: float | None = None
    median: float | None = None
    ranks: tuple[RankEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class CollectionStats:
    """The `<stats>` block of a collection item."""

    min_players: int | None = None
    max_players: int | None = None
    min_playtime: int | None = None
    max_playtime: int | None = None
    playing_time: int | None = None
    num_owned: int | None = None
    rating: CollectionRating | None = None


@dataclass(frozen=True, slots=True)
class CollectionStatus:
    """Raw status flags of a collection item (1/"1" means set)."""

    own: ScalarValue | None = None
    prevowned: ScalarValue | None = None
    fortrade: ScalarValue | None = None
    want: ScalarValue | None = None
    wanttoplay: ScalarValue | None = None
    wanttobuy: ScalarValue | None = None
    wishlist: ScalarValue | None = None
    preordered: ScalarValue | None = None
    last_modified: str | None = None


@dataclass(frozen=True, slots=True)
class CollectionEntry:
    """
    One item in a user's collection.

    `object_id` identifies the game; `collection_id` identifies this copy.
    The same game can appear several times with different collection ids.
    """

    object_id: str
    collection_id: str
    name: str
    object_type: str | None = None
    subtype: str | None = None
    year_published: int | None = None
    image: str | None = None
    thumbnail: str | None = None
    stats: CollectionStats | None = None
    status: CollectionStatus | None = None
    num_plays: int = 0


@dataclass(frozen=True, slots=True)
class Link:
    """A typed association on a thing (category, mechanic, designer, ...)."""

    type: str
    id: str
    value: str


@dataclass(frozen=True, slots=True)
class PollSummary:
    """Header of a community poll attached to a thing."""

    name: str
    title: str | None = None
    total_votes: int = 0


@dataclass(frozen=True, slots=True)
class DetailRatings:
    """Community statistics from the `/thing?stats=1` endpoint."""

    users_rated: int | None = None
    average: float | None = None
    bayes_average: float | None = None
    stddev: float | None = None
    median: float | None = None
    average_weight: float | None = None
    ranks: tuple[RankEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class GameDetail:
    """
    Full detail for one thing.

    `links` is None when the payload carried no link elements at all,
    which lets mergers tell "absent" apart from "empty".
    """

    object_id: str
    name: str
    object_type: str | None = None
    sort_index: int | None = None
    description: str | None = None
    year_published: int | None = None
    image: str | None = None
    thumbnail: str | None = None
    min_players: int | None = None
    max_players: int | None = None
    playing_time: int | None = None
    min_playtime: int | None = None
    max_playtime: int | None = None
    min_age: int | None = None
    links: tuple[Link, ...] | None = None
    polls: tuple[PollSummary, ...] = ()
    ratings: DetailRatings | None = None


@dataclass(frozen=True, slots=True)
class Play:
    """A logged play session."""

    id: str
    game_id: str
    game_name: str | None = None
    date: datetime.date | None = None
    quantity: int = 1
    length: int = 0
    incomplete: bool = False
    location: str | None = None


@dataclass(frozen=True, slots=True)
class PlaysPage:
    """
    One page of the `/plays` endpoint.

    Attributes:
        received: Number of `<play>` elements on the page, including any
            dropped during extraction; pagination compares this to the page size
    """

    total: int
    page: int
    plays: list[Play] = field(default_factory=list)
    received: int = 0
