"""
Response envelope for the HTTP API.

Every endpoint answers with an `ApiResponse`: either a success carrying
data, or a failure classified by the same `FailureKind` the BGG client
returns, so API consumers can branch on the kind (and on `retryable`)
instead of parsing messages.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from fastapi import status
from pydantic import BaseModel, Field

from shelfpicker.models.result import Failure, FailureKind

T = TypeVar("T")


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    FAILURE = "failure"


# HTTP status per failure kind
STATUS_CODES: dict[FailureKind, int] = {
    FailureKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    FailureKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.PROCESSING: status.HTTP_503_SERVICE_UNAVAILABLE,
    FailureKind.NETWORK_UNREACHABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    FailureKind.API_ERROR: status.HTTP_502_BAD_GATEWAY,
    FailureKind.UPSTREAM_ERROR: status.HTTP_502_BAD_GATEWAY,
}


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="Explanation of what went wrong",
    )
    retryable: bool | None = Field(
        default=None,
        description="Whether retrying the same request may succeed",
    )
    suggested_backoff_seconds: float | None = Field(
        default=None,
        description="How long to wait before retrying",
    )


class ApiResponse(BaseModel, Generic[T]):
    """Universal response envelope for all API endpoints."""

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on failure)",
    )

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        """Create a success response."""
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def from_failure(cls, failure: Failure) -> "ApiResponse[Any]":
        """Create a failure response from a client Failure."""
        return cls(
            outcome=OutcomeType.FAILURE,
            failure=FailureDetail(
                kind=failure.kind,
                message=failure.error,
                retryable=failure.retryable,
                suggested_backoff_seconds=failure.suggested_backoff_seconds,
            ),
        )


def status_code_for(failure: Failure) -> int:
    """HTTP status code for a failure."""
    return STATUS_CODES.get(failure.kind, status.HTTP_502_BAD_GATEWAY)
