"""
Tagged results returned by every BGG client operation.

Expected failures (not found, processing, rate limiting, unreachable
network) come back as `Failure` values and are never raised. Callers
branch on `result.ok` and, for failures, on `result.kind`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Literal, TypeVar

T = TypeVar("T")


class FailureKind(str, Enum):
    """Classification of client failures."""

    # Rejected before any network call
    INVALID_INPUT = "invalid_input"

    # Entity genuinely absent upstream; terminal
    NOT_FOUND = "not_found"

    # Upstream is still computing the result
    PROCESSING = "processing"

    # Other 4xx rejection
    API_ERROR = "api_error"

    # 5xx or other failure after retries were exhausted
    UPSTREAM_ERROR = "upstream_error"

    # Connection refused, DNS failure, blocked request; retrying will not help
    NETWORK_UNREACHABLE = "network_unreachable"


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result carrying typed data."""

    data: T
    ok: Literal[True] = True


@dataclass(frozen=True, slots=True)
class Failure:
    """
    Failed result.

    Attributes:
        kind: Typed discriminant for branching
        error: Human-readable message
        retryable: Whether an outer retry layer should try again (None: unspecified)
        suggested_backoff_seconds: Hint for how long to wait before retrying
    """

    kind: FailureKind
    error: str
    retryable: bool | None = None
    suggested_backoff_seconds: float | None = None
    ok: Literal[False] = False

    @property
    def is_not_found(self) -> bool:
        return self.kind == FailureKind.NOT_FOUND


BggResult = Ok[T] | Failure
