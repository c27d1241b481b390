"""
Result cache for BGG lookups.

Keys are built from request parameters (e.g. "collection:alice"). Only
successful results are stored, so a failure is retried on the next call.
"""

import time
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar

from shelfpicker.models.result import BggResult, Failure

T = TypeVar("T")

Loader = Callable[[], Awaitable[BggResult[T]]]


class ResultCache(Protocol):
    """Anything that can serve a cached result or load and remember it."""

    async def get_or_load(self, key: str, ttl_seconds: float, loader: Loader[T]) -> BggResult[T]:
        ...

    def invalidate(self, prefix: str) -> None:
        ...


class TTLCache:
    """
    In-memory cache with a per-entry lifetime.

    Expired entries are dropped lazily on lookup.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize cache.

        Args:
            clock: Monotonic time source, replaceable in tests
        """
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def get_or_load(self, key: str, ttl_seconds: float, loader: Loader[T]) -> BggResult[T]:
        """Return the cached result for key, or await loader and cache an Ok."""
        now = self._clock()

        cached = self._entries.get(key)
        if cached is not None:
            expires_at, result = cached
            if now < expires_at:
                return result
            del self._entries[key]

        result = await loader()
        if not isinstance(result, Failure):
            self._entries[key] = (now + ttl_seconds, result)
        return result

    def invalidate(self, prefix: str) -> None:
        """Drop every entry whose key starts with prefix."""
        for key in [k for k in self._entries if k.startswith(prefix)]:
            del self._entries[key]
