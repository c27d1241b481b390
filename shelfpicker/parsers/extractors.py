"""
Endpoint-specific projections from node trees to typed records.

BGG emits the same logical value in several shapes depending on endpoint
and element: a bare scalar (`<numplays>3</numplays>`), text next to
attributes (`<name sortindex="1">Azul</name>`), or a `value` attribute
(`<minplayers value="2"/>`). `resolve_scalar` is the one place that
knows all of them; every extractor goes through it.

Extractors are pure: no I/O, no exceptions for unknown structure.
"""

import datetime

from shelfpicker.models.records import (
    CollectionEntry,
    CollectionRating,
    CollectionStats,
    CollectionStatus,
    DetailRatings,
    GameDetail,
    Link,
    Play,
    PlaysPage,
    PollSummary,
    RankEntry,
    UserInfo,
)
from shelfpicker.models.xml_node import (
    TEXT_KEY,
    ScalarValue,
    XmlMapping,
    XmlNode,
    XmlScalar,
    XmlSequence,
)
from shelfpicker.parsers.xml_converter import XmlParseError, parse_xml

# Older payload generations nested attributes one level down
LEGACY_ATTRIBUTES_KEY = "@attributes"

PROCESSING_MARKER = "processed"


# =============================================================================
# SHAPE RESOLUTION
# =============================================================================


def resolve_scalar(node: XmlNode | None) -> ScalarValue | None:
    """
    Resolve the first matching shape of a scalar value.

    Tried in order: bare scalar, text key, `value` attribute, legacy
    `@attributes.value`. Returns None when no shape matches.
    """
    if node is None:
        return None
    if isinstance(node, XmlScalar):
        return node.value
    if isinstance(node, XmlSequence):
        return None

    for key in (TEXT_KEY, "value"):
        candidate = node.get(key)
        if isinstance(candidate, XmlScalar):
            return candidate.value

    legacy = node.get(LEGACY_ATTRIBUTES_KEY)
    if isinstance(legacy, XmlMapping):
        candidate = legacy.get("value")
        if isinstance(candidate, XmlScalar):
            return candidate.value

    return None


def as_list(node: XmlNode | None) -> list[XmlNode]:
    """Normalize single vs. repeated elements to a list."""
    if node is None:
        return []
    if isinstance(node, XmlSequence):
        return list(node.items)
    return [node]


def _child(node: XmlNode | None, key: str) -> XmlNode | None:
    if isinstance(node, XmlMapping):
        return node.get(key)
    return None


def _attr(node: XmlNode | None, key: str) -> ScalarValue | None:
    """Read an attribute directly (no shape fallback)."""
    value = _child(node, key)
    if isinstance(value, XmlScalar):
        return value.value
    return None


def _as_str(value: ScalarValue | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_int(value: ScalarValue | None) -> int | None:
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return None


def _as_float(value: ScalarValue | None) -> float | None:
    if isinstance(value, int | float):
        return float(value)
    return None


def _field_str(node: XmlNode | None, key: str) -> str | None:
    return _as_str(resolve_scalar(_child(node, key)))


def _field_int(node: XmlNode | None, key: str) -> int | None:
    return _as_int(resolve_scalar(_child(node, key)))


def _field_float(node: XmlNode | None, key: str) -> float | None:
    return _as_float(resolve_scalar(_child(node, key)))


def is_error_document(node: XmlNode) -> bool:
    """Detect the `<errors>`/`<error>` documents BGG sends for bad queries."""
    if not isinstance(node, XmlMapping):
        return False
    if "error" in node or "errors" in node:
        return True
    return _attr(node, "type") == "error"


# =============================================================================
# USER
# =============================================================================


def extract_user(node: XmlNode) -> UserInfo | None:
    """
    Project a `/user` payload.

    Returns None when the user does not exist: BGG answers unknown names
    with an empty id, and some deployments with an error document.
    """
    if is_error_document(node) or not isinstance(node, XmlMapping):
        return None

    user_id = _field_str(node, "id")
    name = _field_str(node, "name")
    if not user_id or not name:
        return None

    return UserInfo(
        id=user_id,
        name=name,
        year_registered=_field_int(node, "yearregistered"),
        last_login=_field_str(node, "lastlogin") or None,
        country=_field_str(node, "country") or None,
    )


# =============================================================================
# RANKS (shared by collection and thing payloads)
# =============================================================================


def _extract_ranks(ratings: XmlNode | None) -> tuple[RankEntry, ...]:
    ranks: list[RankEntry] = []
    for rank in as_list(_child(_child(ratings, "ranks"), "rank")):
        name = _as_str(_attr(rank, "name"))
        if name is None:
            continue
        ranks.append(
            RankEntry(
                name=name,
                value=resolve_scalar(rank),
                friendly_name=_as_str(_attr(rank, "friendlyname")),
                type=_as_str(_attr(rank, "type")),
            )
        )
    return tuple(ranks)


# =============================================================================
# COLLECTION
# =============================================================================


def _extract_collection_rating(rating: XmlNode | None) -> CollectionRating | None:
    if rating is None:
        return None
    return CollectionRating(
        value=_attr(rating, "value"),
        users_rated=_field_int(rating, "usersrated"),
        average=_field_float(rating, "average"),
        bayes_average=_field_float(rating, "bayesaverage"),
        stddev=_field_float(rating, "stddev"),
        median=_field_float(rating, "median"),
        ranks=_extract_ranks(rating),
    )


def _extract_collection_stats(stats: XmlNode | None) -> CollectionStats | None:
    if stats is None:
        return None
    return CollectionStats(
        min_players=_field_int(stats, "minplayers"),
        max_players=_field_int(stats, "maxplayers"),
        min_playtime=_field_int(stats, "minplaytime"),
        max_playtime=_field_int(stats, "maxplaytime"),
        playing_time=_field_int(stats, "playingtime"),
        num_owned=_field_int(stats, "numowned"),
        rating=_extract_collection_rating(_child(stats, "rating")),
    )


def _extract_collection_status(status: XmlNode | None) -> CollectionStatus | None:
    if status is None:
        return None
    return CollectionStatus(
        own=_attr(status, "own"),
        prevowned=_attr(status, "prevowned"),
        fortrade=_attr(status, "fortrade"),
        want=_attr(status, "want"),
        wanttoplay=_attr(status, "wanttoplay"),
        wanttobuy=_attr(status, "wanttobuy"),
        wishlist=_attr(status, "wishlist"),
        preordered=_attr(status, "preordered"),
        last_modified=_as_str(_attr(status, "lastmodified")),
    )


def _root_items(node: XmlNode) -> list[XmlNode]:
    items = _child(node, "item")
    if items is None:
        items = _child(_child(node, "items"), "item")
    return as_list(items)


def extract_collection(node: XmlNode) -> list[CollectionEntry]:
    """
    Project a `/collection` payload.

    An empty collection yields an empty list. Items without an object id
    are skipped.
    """
    entries: list[CollectionEntry] = []

    for item in _root_items(node):
        object_id = _as_str(_attr(item, "objectid"))
        if object_id is None:
            continue

        entries.append(
            CollectionEntry(
                object_id=object_id,
                collection_id=_as_str(_attr(item, "collid")) or object_id,
                name=_field_str(item, "name") or "",
                object_type=_as_str(_attr(item, "objecttype")),
                subtype=_as_str(_attr(item, "subtype")),
                year_published=_field_int(item, "yearpublished"),
                image=_field_str(item, "image"),
                thumbnail=_field_str(item, "thumbnail"),
                stats=_extract_collection_stats(_child(item, "stats")),
                status=_extract_collection_status(_child(item, "status")),
                num_plays=_field_int(item, "numplays") or 0,
            )
        )

    return entries


# =============================================================================
# THING (GAME DETAIL)
# =============================================================================


def _primary_name(item: XmlNode) -> tuple[str, int | None]:
    """Pick the name marked primary, else the first one."""
    names = as_list(_child(item, "name"))
    if not names:
        return "", None

    chosen = next((n for n in names if _attr(n, "type") == "primary"), names[0])
    return _as_str(resolve_scalar(chosen)) or "", _as_int(_attr(chosen, "sortindex"))


def _extract_links(item: XmlNode) -> tuple[Link, ...] | None:
    raw_links = _child(item, "link")
    if raw_links is None:
        return None

    links: list[Link] = []
    for link in as_list(raw_links):
        link_type = _as_str(_attr(link, "type"))
        value = _as_str(_attr(link, "value"))
        if link_type is None or value is None:
            continue
        links.append(Link(type=link_type, id=_as_str(_attr(link, "id")) or "", value=value))
    return tuple(links)


def _extract_polls(item: XmlNode) -> tuple[PollSummary, ...]:
    polls: list[PollSummary] = []
    for poll in as_list(_child(item, "poll")):
        name = _as_str(_attr(poll, "name"))
        if name is None:
            continue
        polls.append(
            PollSummary(
                name=name,
                title=_as_str(_attr(poll, "title")),
                total_votes=_as_int(_attr(poll, "totalvotes")) or 0,
            )
        )
    return tuple(polls)


def _extract_detail_ratings(item: XmlNode) -> DetailRatings | None:
    ratings = _child(_child(item, "statistics"), "ratings")
    if ratings is None:
        return None
    return DetailRatings(
        users_rated=_field_int(ratings, "usersrated"),
        average=_field_float(ratings, "average"),
        bayes_average=_field_float(ratings, "bayesaverage"),
        stddev=_field_float(ratings, "stddev"),
        median=_field_float(ratings, "median"),
        average_weight=_field_float(ratings, "averageweight"),
        ranks=_extract_ranks(ratings),
    )


def extract_game_detail(item: XmlNode) -> GameDetail | None:
    """Project a single `<item>` from a `/thing` payload."""
    object_id = _as_str(_attr(item, "id"))
    if object_id is None:
        return None

    name, sort_index = _primary_name(item)
    return GameDetail(
        object_id=object_id,
        name=name,
        object_type=_as_str(_attr(item, "type")),
        sort_index=sort_index,
        description=_field_str(item, "description"),
        year_published=_field_int(item, "yearpublished"),
        image=_field_str(item, "image"),
        thumbnail=_field_str(item, "thumbnail"),
        min_players=_field_int(item, "minplayers"),
        max_players=_field_int(item, "maxplayers"),
        playing_time=_field_int(item, "playingtime"),
        min_playtime=_field_int(item, "minplaytime"),
        max_playtime=_field_int(item, "maxplaytime"),
        min_age=_field_int(item, "minage"),
        links=_extract_links(item),
        polls=_extract_polls(item),
        ratings=_extract_detail_ratings(item),
    )


def extract_game_details(node: XmlNode) -> list[GameDetail]:
    """Project every `<item>` of a `/thing` payload, in document order."""
    details: list[GameDetail] = []
    for item in _root_items(node):
        detail = extract_game_detail(item)
        if detail is not None:
            details.append(detail)
    return details


# =============================================================================
# PLAYS
# =============================================================================


def _parse_play_date(value: ScalarValue | None) -> datetime.date | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        # BGG uses 0000-00-00 for undated plays
        return None


def extract_play(play: XmlNode) -> Play | None:
    """Project a single `<play>`; plays without an item id are dropped."""
    item = _child(play, "item")
    game_id = _as_str(_attr(item, "objectid"))
    if game_id is None:
        return None

    quantity = _as_int(_attr(play, "quantity"))
    return Play(
        id=_as_str(_attr(play, "id")) or "",
        game_id=game_id,
        game_name=_as_str(_attr(item, "name")),
        date=_parse_play_date(_attr(play, "date")),
        quantity=1 if quantity is None else quantity,
        length=_as_int(_attr(play, "length")) or 0,
        incomplete=_attr(play, "incomplete") in (1, "1"),
        location=_as_str(_attr(play, "location")) or None,
    )


def extract_plays_page(node: XmlNode) -> PlaysPage:
    """Project one page of a `/plays` payload."""
    raw_plays = as_list(_child(node, "play"))
    plays = [p for p in (extract_play(raw) for raw in raw_plays) if p]
    return PlaysPage(
        total=_as_int(_attr(node, "total")) or 0,
        page=_as_int(_attr(node, "page")) or 1,
        plays=plays,
        received=len(raw_plays),
    )


# =============================================================================
# PROCESSING CHECK
# =============================================================================


def is_processing(text: str) -> bool:
    """
    Detect BGG's "request accepted, still processing" body.

    Two variants exist: an XML `<message>` root and an HTML page whose
    `body/p` carries the notice. Never raises.
    """
    # Every processing notice contains the marker
    if PROCESSING_MARKER not in text:
        return False

    try:
        node = parse_xml(text)
    except XmlParseError:
        return False

    if isinstance(node, XmlScalar):
        message = node.value
    else:
        message = resolve_scalar(_child(_child(node, "body"), "p"))

    return isinstance(message, str) and PROCESSING_MARKER in message
