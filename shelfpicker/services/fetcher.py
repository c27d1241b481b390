"""
Retrying HTTP fetcher for BGG XMLAPI2.

BGG answers expensive queries (collections especially) with 202 while it
builds the result, and is prone to 5xx and throttling under load. The
fetcher turns that into one awaitable call:

    200          -> return the response
    4xx          -> return the response (permanent rejection, caller decides)
    202, 5xx     -> wait and retry with exponential backoff
    network error-> wait and retry with the same backoff
    anything else-> FetchError

Backoff starts at `initial_delay` and doubles on every retry, without
jitter or cap. `max_retries` bounds the number of requests, so a request
that never succeeds sleeps `initial_delay * (2 ** (max_retries - 1) - 1)`
seconds in total before giving up.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 5
DEFAULT_INITIAL_DELAY = 2.0


@dataclass(frozen=True, slots=True)
class FetchResponse:
    """Status and body of an upstream response."""

    status: int
    text: str
    reason: str = ""

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status < 500


Transport = Callable[[str, Mapping[str, Any] | None], Awaitable[FetchResponse]]
Sleep = Callable[[float], Awaitable[None]]


class FetchError(Exception):
    """Raised when a fetch cannot produce a usable response."""

    def __init__(self, message: str, attempts: int = 0) -> None:
        self.attempts = attempts
        super().__init__(message)


class ProcessingTimeoutError(FetchError):
    """Upstream was still processing when the retry ceiling was reached."""

    pass


class UpstreamUnavailableError(FetchError):
    """Upstream kept returning server errors until the retry ceiling."""

    def __init__(self, status: int, attempts: int) -> None:
        self.status = status
        super().__init__(f"BGG API returned status {status} after {attempts} attempts", attempts)


class NetworkUnreachableError(FetchError):
    """
    The request never reached upstream (connection refused, DNS, blocked).

    These failures are treated as permanent by callers once the fetcher's
    own retries are exhausted.
    """

    pass


class HttpxTransport:
    """Transport issuing GET requests through an httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def __call__(self, url: str, params: Mapping[str, Any] | None = None) -> FetchResponse:
        response = await self.client.get(url, params=params)
        return FetchResponse(
            status=response.status_code,
            text=response.text,
            reason=response.reason_phrase,
        )


class RetryingFetcher:
    """
    Issue a GET and retry "processing" and transient failures.

    State per call: attempt counter and current delay. Nothing is shared
    between calls, so concurrent fetches for different URLs are independent.
    """

    def __init__(
        self,
        transport: Transport,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_delay: float = DEFAULT_INITIAL_DELAY,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            transport: Callable performing one request
            max_retries: Maximum number of requests per fetch (the ceiling)
            initial_delay: First backoff interval in seconds
            sleep: Awaitable sleep, replaceable in tests
        """
        if max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {max_retries}")
        self.transport = transport
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self.sleep = sleep

    async def fetch(self, url: str, params: Mapping[str, Any] | None = None) -> FetchResponse:
        """
        Fetch a URL, retrying until ready, rejected, or out of attempts.

        Returns:
            The 200 response, or a 4xx response for the caller to classify

        Raises:
            ProcessingTimeoutError: Still 202 after `max_retries` requests
            UpstreamUnavailableError: Still 5xx after `max_retries` requests
            NetworkUnreachableError: Transport kept failing
            FetchError: Unexpected status code
        """
        attempt = 0
        delay = self.initial_delay

        while True:
            try:
                response = await self.transport(url, params)
            except (httpx.RequestError, OSError) as e:
                attempt += 1
                if attempt >= self.max_retries:
                    raise NetworkUnreachableError(
                        f"Network error fetching {url}: {e}", attempt
                    ) from e
                logger.warning(
                    "Network error fetching %s (attempt %d/%d), retrying in %.1fs: %s",
                    url,
                    attempt,
                    self.max_retries,
                    delay,
                    e,
                )
                await self.sleep(delay)
                delay *= 2
                continue

            if response.status == 200:
                return response

            if response.is_client_error:
                return response

            if response.status == 202:
                attempt += 1
                if attempt >= self.max_retries:
                    raise ProcessingTimeoutError(
                        "BGG API is still processing the request after maximum retries",
                        attempt,
                    )
                logger.warning(
                    "BGG still processing %s (attempt %d/%d), retrying in %.1fs",
                    url,
                    attempt,
                    self.max_retries,
                    delay,
                )
                await self.sleep(delay)
                delay *= 2
                continue

            if response.status >= 500:
                attempt += 1
                if attempt >= self.max_retries:
                    raise UpstreamUnavailableError(response.status, attempt)
                logger.warning(
                    "BGG returned %d for %s (attempt %d/%d), retrying in %.1fs",
                    response.status,
                    url,
                    attempt,
                    self.max_retries,
                    delay,
                )
                await self.sleep(delay)
                delay *= 2
                continue

            raise FetchError(f"BGG API returned unexpected status {response.status}", attempt + 1)
