"""
Game mapper.

Normalizes collection entries, game details and plays into the canonical
`Game` model. Every function returns new values; inputs are never mutated.
"""

import datetime
from collections.abc import Iterable, Sequence
from dataclasses import replace

from shelfpicker.models.game import Game, OwnershipStatus, PlayerRange, PlaytimeRange, Rating
from shelfpicker.models.records import (
    CollectionEntry,
    CollectionStatus,
    GameDetail,
    Link,
    Play,
    RankEntry,
)
from shelfpicker.models.xml_node import ScalarValue

NOT_RANKED = "Not Ranked"
OVERALL_RANK = "boardgame"
STRATEGY_RANK = "strategygames"

CATEGORY_LINK = "boardgamecategory"
MECHANIC_LINK = "boardgamemechanic"
DESIGNER_LINK = "boardgamedesigner"


def _flag(value: ScalarValue | None) -> bool:
    return value == 1 or value == "1"


def _rank(ranks: Iterable[RankEntry], name: str) -> int | None:
    """Find a rank by family name and parse it; unranked values become None."""
    entry = next((r for r in ranks if r.name == name), None)
    if entry is None or entry.value == NOT_RANKED:
        return None

    value = entry.value
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError:
            return None
    if isinstance(value, float):
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        return None
    return value


def _user_rating(value: ScalarValue | None) -> float | None:
    if isinstance(value, int | float):
        return float(value)
    return None


def _weight(value: float | None) -> float | None:
    # BGG reports 0 when no weight votes were cast
    if not value:
        return None
    return value


def _link_values(links: Sequence[Link], link_type: str) -> tuple[str, ...]:
    return tuple(link.value for link in links if link.type == link_type)


def _status(status: CollectionStatus | None) -> OwnershipStatus:
    if status is None:
        return OwnershipStatus()
    return OwnershipStatus(
        owned=_flag(status.own),
        previously_owned=_flag(status.prevowned),
        for_trade=_flag(status.fortrade),
        want=_flag(status.want),
        want_to_play=_flag(status.wanttoplay),
        want_to_buy=_flag(status.wanttobuy),
        wishlist=_flag(status.wishlist),
        preordered=_flag(status.preordered),
        last_modified=status.last_modified or "",
    )


def collection_entry_to_game(entry: CollectionEntry) -> Game:
    """
    Convert one collection entry to a Game.

    Status flags are set only for 1 or "1". Ranks are looked up by family
    name and the "Not Ranked" sentinel maps to None.
    """
    stats = entry.stats
    rating = stats.rating if stats else None
    ranks = rating.ranks if rating else ()

    return Game(
        id=entry.object_id,
        collection_id=entry.collection_id,
        name=entry.name,
        year_published=entry.year_published,
        image=entry.image,
        thumbnail=entry.thumbnail,
        players=PlayerRange(
            min=(stats.min_players if stats else None) or 0,
            max=(stats.max_players if stats else None) or 0,
        ),
        playtime=PlaytimeRange(
            min=(stats.min_playtime if stats else None) or 0,
            max=(stats.max_playtime if stats else None) or 0,
        ),
        num_owned=(stats.num_owned if stats else None) or 0,
        rating=Rating(
            average=(rating.average if rating else None) or 0.0,
            bayes_average=(rating.bayes_average if rating else None) or 0.0,
            users_rated=(rating.users_rated if rating else None) or 0,
            rank=_rank(ranks, OVERALL_RANK),
            strategy_rank=_rank(ranks, STRATEGY_RANK),
        ),
        status=_status(entry.status),
        play_count=entry.num_plays,
        user_rating=_user_rating(rating.value if rating else None),
    )


def map_collection_to_games(entries: Iterable[CollectionEntry]) -> list[Game]:
    """Convert a whole collection, preserving order."""
    return [collection_entry_to_game(entry) for entry in entries]


def merge_game_info(game: Game, detail: GameDetail) -> Game:
    """
    Overlay description, weight and link lists from a detail payload.

    Anything the detail does not carry keeps the game's current value.
    """
    changes: dict[str, object] = {}

    if detail.description is not None:
        changes["description"] = detail.description

    if detail.ratings is not None and detail.ratings.average_weight is not None:
        changes["weight"] = _weight(detail.ratings.average_weight)

    if detail.links is not None:
        changes["categories"] = _link_values(detail.links, CATEGORY_LINK)
        changes["mechanics"] = _link_values(detail.links, MECHANIC_LINK)
        changes["designers"] = _link_values(detail.links, DESIGNER_LINK)

    return replace(game, **changes)


def merge_games_info(games: Iterable[Game], details: Iterable[GameDetail]) -> list[Game]:
    """Merge details into games by item id; games without a detail pass through."""
    by_id = {detail.object_id: detail for detail in details}
    return [
        merge_game_info(game, by_id[game.id]) if game.id in by_id else game for game in games
    ]


def merge_plays(games: Iterable[Game], plays: Iterable[Play]) -> list[Game]:
    """
    Set play count and last played date from logged plays.

    Play count is the sum of quantities per game id, last played the
    latest dated play. Games with no plays are returned unchanged.
    """
    totals: dict[str, tuple[int, datetime.date | None]] = {}
    for play in plays:
        count, last = totals.get(play.game_id, (0, None))
        if play.date is not None and (last is None or play.date > last):
            last = play.date
        totals[play.game_id] = (count + play.quantity, last)

    merged: list[Game] = []
    for game in games:
        aggregate = totals.get(game.id)
        if aggregate is None:
            merged.append(game)
            continue
        count, last = aggregate
        merged.append(replace(game, play_count=count, last_played=last))
    return merged


def game_info_to_game(detail: GameDetail) -> Game:
    """
    Build a Game from detail data alone.

    Used when there is no collection entry: ownership flags are all unset,
    play count is zero and the item id doubles as collection id.
    """
    ratings = detail.ratings
    ranks = ratings.ranks if ratings else ()
    links = detail.links or ()

    return Game(
        id=detail.object_id,
        collection_id=detail.object_id,
        name=detail.name,
        year_published=detail.year_published,
        image=detail.image,
        thumbnail=detail.thumbnail,
        players=PlayerRange(min=detail.min_players or 0, max=detail.max_players or 0),
        playtime=PlaytimeRange(min=detail.min_playtime or 0, max=detail.max_playtime or 0),
        rating=Rating(
            average=(ratings.average if ratings else None) or 0.0,
            bayes_average=(ratings.bayes_average if ratings else None) or 0.0,
            users_rated=(ratings.users_rated if ratings else None) or 0,
            rank=_rank(ranks, OVERALL_RANK),
            strategy_rank=_rank(ranks, STRATEGY_RANK),
        ),
        status=OwnershipStatus(),
        play_count=0,
        description=detail.description,
        weight=_weight(ratings.average_weight if ratings else None),
        categories=_link_values(links, CATEGORY_LINK),
        mechanics=_link_values(links, MECHANIC_LINK),
        designers=_link_values(links, DESIGNER_LINK),
    )
