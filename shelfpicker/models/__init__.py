from shelfpicker.models.failure import ApiResponse, FailureDetail, OutcomeType
from shelfpicker.models.game import Game, OwnershipStatus, PlayerRange, PlaytimeRange, Rating
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
from shelfpicker.models.result import BggResult, Failure, FailureKind, Ok
from shelfpicker.models.xml_node import (
    TEXT_KEY,
    ScalarValue,
    XmlMapping,
    XmlNode,
    XmlScalar,
    XmlSequence,
    to_plain,
)

__all__ = [
    "ApiResponse",
    "BggResult",
    "CollectionEntry",
    "CollectionRating",
    "CollectionStats",
    "CollectionStatus",
    "DetailRatings",
    "Failure",
    "FailureDetail",
    "FailureKind",
    "Game",
    "GameDetail",
    "Link",
    "Ok",
    "OutcomeType",
    "OwnershipStatus",
    "PlayerRange",
    "Play",
    "PlaysPage",
    "PlaytimeRange",
    "PollSummary",
    "RankEntry",
    "Rating",
    "ScalarValue",
    "TEXT_KEY",
    "UserInfo",
    "XmlMapping",
    "XmlNode",
    "XmlScalar",
    "XmlSequence",
    "to_plain",
]
