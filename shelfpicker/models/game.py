import datetime
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PlayerRange:
    """Supported player count."""

    min: int = 0
    max: int = 0


@dataclass(frozen=True, slots=True)
class PlaytimeRange:
    """Playing time in minutes."""

    min: int = 0
    max: int = 0


@dataclass(frozen=True, slots=True)
class Rating:
    """
    Community rating of a game.

    Attributes:
        average: Mean user rating
        bayes_average: BGG's Bayes-adjusted average (the "Geek rating")
        users_rated: Number of raters
        rank: Overall board game rank, None when not ranked
        strategy_rank: Strategy games category rank, None when not ranked
    """

    average: float = 0.0
    bayes_average: float = 0.0
    users_rated: int = 0
    rank: int | None = None
    strategy_rank: int | None = None


@dataclass(frozen=True, slots=True)
class OwnershipStatus:
    """Collection status flags for one copy of a game."""

    owned: bool = False
    previously_owned: bool = False
    for_trade: bool = False
    want: bool = False
    want_to_play: bool = False
    want_to_buy: bool = False
    wishlist: bool = False
    preordered: bool = False
    last_modified: str = ""


@dataclass(frozen=True, slots=True)
class Game:
    """
    A game in a user's collection, merged from collection, detail and play data.

    Identity is (id, collection_id): `id` is the BGG item id shared by every
    copy of the game, `collection_id` addresses one collection entry.
    Instances are never mutated; merges return new values.

    Attributes:
        weight: Complexity rating (1.0-5.0), None when nobody voted
        user_rating: The collection owner's own rating, if any
        play_count: Total logged plays (sum of play quantities)
        last_played: Date of the most recent logged play
    """

    id: str
    collection_id: str
    name: str
    year_published: int | None = None
    image: str | None = None
    thumbnail: str | None = None
    players: PlayerRange = PlayerRange()
    playtime: PlaytimeRange = PlaytimeRange()
    num_owned: int = 0
    rating: Rating = Rating()
    status: OwnershipStatus = OwnershipStatus()
    play_count: int = 0
    user_rating: float | None = None
    description: str | None = None
    weight: float | None = None
    categories: tuple[str, ...] = ()
    mechanics: tuple[str, ...] = ()
    designers: tuple[str, ...] = ()
    last_played: datetime.date | None = None
