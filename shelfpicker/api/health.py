"""
Health check endpoint.

Liveness only: BGG availability is reported per request through the
response envelope, not here.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shelfpicker.config import settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    upstream: str


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running. Does not call BGG.
    """
    return HealthResponse(status="healthy", upstream=settings.bgg_base_url)
