"""
BoardGameGeek XMLAPI2 client.

Composes the retrying fetcher with the endpoint extractors. Every public
operation returns a `BggResult`: expected failures (bad input, not found,
still processing, upstream down, network unreachable) are values, never
exceptions. Only a malformed XML payload (`XmlParseError`) propagates.

API reference: https://boardgamegeek.com/wiki/page/BGG_XML_API2
"""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from shelfpicker.config import Settings, settings as default_settings
from shelfpicker.models.records import CollectionEntry, GameDetail, Play, PlaysPage, UserInfo
from shelfpicker.models.result import BggResult, Failure, FailureKind, Ok
from shelfpicker.parsers.extractors import (
    extract_collection,
    extract_game_details,
    extract_plays_page,
    extract_user,
    is_error_document,
    is_processing,
)
from shelfpicker.parsers.xml_converter import parse_xml
from shelfpicker.services.fetcher import (
    FetchError,
    FetchResponse,
    HttpxTransport,
    NetworkUnreachableError,
    ProcessingTimeoutError,
    RetryingFetcher,
    Sleep,
)

logger = logging.getLogger(__name__)


def _empty(value: str | None) -> bool:
    return not value or not value.strip()


class BggClient:
    """
    Async client for the BGG endpoints the collection picker needs.

    Use as an async context manager when the client creates its own
    httpx.AsyncClient, so the connection pool is closed afterwards.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
        fetcher: RetryingFetcher | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """
        Initialize the BGG client.

        Args:
            settings: Configuration. Defaults to the module-level settings.
            client: Optional httpx client for connection reuse
            fetcher: Optional pre-built fetcher (overrides `client`)
            sleep: Awaitable sleep used for backoff and courtesy delays
        """
        self.settings = settings or default_settings
        self.sleep = sleep
        self._owns_client = client is None and fetcher is None

        if fetcher is None:
            if client is None:
                client = httpx.AsyncClient(
                    headers=self._default_headers(),
                    timeout=self.settings.bgg_request_timeout,
                    follow_redirects=True,
                )
            fetcher = RetryingFetcher(
                HttpxTransport(client),
                max_retries=self.settings.bgg_max_retries,
                initial_delay=self.settings.bgg_initial_retry_delay,
                sleep=sleep,
            )

        self._client = client
        self.fetcher = fetcher

    def _default_headers(self) -> dict[str, str]:
        headers = {
            "User-Agent": self.settings.bgg_user_agent,
            "Accept": "application/xml",
        }
        if self.settings.bgg_api_token:
            headers["Authorization"] = f"Bearer {self.settings.bgg_api_token}"
        return headers

    async def __aenter__(self) -> "BggClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()

    def _url(self, endpoint: str) -> str:
        return f"{self.settings.bgg_base_url.rstrip('/')}/{endpoint}"

    # -------------------------------------------------------------------------
    # Shared failure handling
    # -------------------------------------------------------------------------

    def _processing_failure(self) -> Failure:
        return Failure(
            kind=FailureKind.PROCESSING,
            error="BGG API is still processing",
            retryable=True,
            suggested_backoff_seconds=self.settings.bgg_processing_backoff,
        )

    def _fetch_failure(self, error: FetchError) -> Failure:
        if isinstance(error, NetworkUnreachableError):
            # The fetcher already retried; an outer retry would only add delay
            return Failure(
                kind=FailureKind.NETWORK_UNREACHABLE,
                error=str(error),
                retryable=False,
            )
        if isinstance(error, ProcessingTimeoutError):
            return Failure(
                kind=FailureKind.PROCESSING,
                error=str(error),
                retryable=True,
                suggested_backoff_seconds=self.settings.bgg_processing_backoff,
            )
        return Failure(kind=FailureKind.UPSTREAM_ERROR, error=str(error), retryable=True)

    @staticmethod
    def _client_error_failure(response: FetchResponse, not_found_message: str) -> Failure:
        if response.status == 404:
            return Failure(kind=FailureKind.NOT_FOUND, error=not_found_message, retryable=False)
        return Failure(
            kind=FailureKind.API_ERROR,
            error=f"BGG API error: {response.reason} ({response.status})",
            retryable=False,
        )

    async def _get(
        self, endpoint: str, params: Mapping[str, Any], not_found_message: str
    ) -> FetchResponse | Failure:
        """
        Fetch an endpoint and classify everything except a usable body.

        Returns the 200 response, or a Failure for client errors, exhausted
        retries, or a "still processing" body.
        """
        try:
            response = await self.fetcher.fetch(self._url(endpoint), params)
        except FetchError as e:
            logger.warning("Fetching %s failed: %s", endpoint, e)
            return self._fetch_failure(e)

        if response.is_client_error:
            return self._client_error_failure(response, not_found_message)

        if is_processing(response.text):
            return self._processing_failure()

        return response

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    async def validate_username(self, username: str) -> BggResult[UserInfo]:
        """
        Check that a BGG user exists.

        GET /user?name={username}
        """
        if _empty(username):
            return Failure(kind=FailureKind.INVALID_INPUT, error="Username cannot be empty")

        not_found = f'User "{username}" not found on BoardGameGeek'
        response = await self._get("user", {"name": username}, not_found)
        if isinstance(response, Failure):
            return response

        user = extract_user(parse_xml(response.text))
        if user is None:
            return Failure(kind=FailureKind.NOT_FOUND, error=not_found, retryable=False)

        return Ok(user)

    # -------------------------------------------------------------------------
    # Collection
    # -------------------------------------------------------------------------

    async def get_collection(
        self, username: str, *, owned_only: bool = True
    ) -> BggResult[list[CollectionEntry]]:
        """
        Fetch a user's collection with statistics, excluding expansions.

        GET /collection?username={username}&own=1&stats=1&excludesubtype=boardgameexpansion
        """
        if _empty(username):
            return Failure(kind=FailureKind.INVALID_INPUT, error="Username cannot be empty")

        params: dict[str, Any] = {
            "username": username,
            "stats": 1,
            "excludesubtype": "boardgameexpansion",
        }
        if owned_only:
            params["own"] = 1

        not_found = f'User "{username}" not found on BoardGameGeek'
        response = await self._get("collection", params, not_found)
        if isinstance(response, Failure):
            return response

        node = parse_xml(response.text)
        if is_error_document(node):
            return Failure(kind=FailureKind.NOT_FOUND, error=not_found, retryable=False)

        entries = extract_collection(node)
        logger.info("Fetched %d collection entries for %s", len(entries), username)
        return Ok(entries)

    # -------------------------------------------------------------------------
    # Game details
    # -------------------------------------------------------------------------

    async def get_game_details(self, game_ids: Sequence[str]) -> BggResult[list[GameDetail]]:
        """
        Fetch details for many games.

        GET /thing?id={id1,id2,...}&stats=1

        BGG caps the number of ids per call, so ids are sent in batches,
        strictly one after another with a courtesy pause in between.
        """
        if not game_ids:
            return Failure(kind=FailureKind.INVALID_INPUT, error="No game IDs provided")

        batch_size = self.settings.bgg_batch_size
        details: list[GameDetail] = []

        for start in range(0, len(game_ids), batch_size):
            batch = game_ids[start : start + batch_size]
            logger.debug("Fetching details batch of %d ids at offset %d", len(batch), start)

            response = await self._get(
                "thing",
                {"id": ",".join(str(game_id) for game_id in batch), "stats": 1},
                f"Games {', '.join(batch)} not found",
            )
            if isinstance(response, Failure):
                return response

            details.extend(extract_game_details(parse_xml(response.text)))

            if start + batch_size < len(game_ids):
                await self.sleep(self.settings.bgg_courtesy_delay)

        return Ok(details)

    async def get_game_detail(self, game_id: str) -> BggResult[GameDetail]:
        """Fetch details for one game."""
        result = await self.get_game_details([game_id])
        if isinstance(result, Failure):
            return result

        if not result.data:
            return Failure(
                kind=FailureKind.NOT_FOUND,
                error=f"Game with ID {game_id} not found",
                retryable=False,
            )

        return Ok(result.data[0])

    # -------------------------------------------------------------------------
    # Plays
    # -------------------------------------------------------------------------

    async def get_plays_page(
        self, username: str, page: int = 1, *, game_id: str | None = None
    ) -> BggResult[PlaysPage]:
        """
        Fetch one page of a user's logged plays.

        GET /plays?username={username}&type=thing&subtype=boardgame&page={page}[&id={game_id}]
        """
        if _empty(username):
            return Failure(kind=FailureKind.INVALID_INPUT, error="Username cannot be empty")

        params: dict[str, Any] = {
            "username": username,
            "type": "thing",
            "subtype": "boardgame",
            "page": page,
        }
        if game_id is not None:
            params["id"] = game_id

        response = await self._get(
            "plays", params, f'User "{username}" not found on BoardGameGeek'
        )
        if isinstance(response, Failure):
            return response

        return Ok(extract_plays_page(parse_xml(response.text)))

    async def get_all_plays(
        self, username: str, *, game_id: str | None = None
    ) -> BggResult[list[Play]]:
        """
        Fetch every logged play, following pagination.

        Pages are requested until one comes back with fewer `<play>`
        elements than the page size. Plays dropped during extraction still
        count toward a full page.
        """
        page_size = self.settings.bgg_plays_page_size
        plays: list[Play] = []
        page = 1

        while True:
            result = await self.get_plays_page(username, page, game_id=game_id)
            if isinstance(result, Failure):
                return result

            plays.extend(result.data.plays)
            if result.data.received < page_size:
                break

            page += 1
            await self.sleep(self.settings.bgg_courtesy_delay)

        logger.info("Fetched %d plays for %s across %d pages", len(plays), username, page)
        return Ok(plays)

    async def get_game_plays(self, username: str, game_id: str) -> BggResult[list[Play]]:
        """Fetch every logged play of one game."""
        if _empty(game_id):
            return Failure(kind=FailureKind.INVALID_INPUT, error="Game ID cannot be empty")
        return await self.get_all_plays(username, game_id=game_id)
