"""Tests for the TTL result cache."""

from shelfpicker.models.result import BggResult, Failure, FailureKind, Ok
from shelfpicker.services.cache import TTLCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class CountingLoader:
    """Loader returning a fixed result and counting invocations."""

    def __init__(self, result: BggResult[str]) -> None:
        self.result = result
        self.calls = 0

    async def __call__(self) -> BggResult[str]:
        self.calls += 1
        return self.result


class TestTTLCache:
    async def test_loads_once_within_ttl(self) -> None:
        clock = FakeClock()
        cache = TTLCache(clock=clock)
        loader = CountingLoader(Ok("value"))

        first = await cache.get_or_load("k", 60, loader)
        clock.now += 59
        second = await cache.get_or_load("k", 60, loader)

        assert first == second == Ok("value")
        assert loader.calls == 1

    async def test_reloads_after_expiry(self) -> None:
        clock = FakeClock()
        cache = TTLCache(clock=clock)
        loader = CountingLoader(Ok("value"))

        await cache.get_or_load("k", 60, loader)
        clock.now += 60
        await cache.get_or_load("k", 60, loader)

        assert loader.calls == 2
        assert len(cache) == 1

    async def test_failures_are_not_cached(self) -> None:
        cache = TTLCache(clock=FakeClock())
        loader = CountingLoader(Failure(FailureKind.PROCESSING, "busy", retryable=True))

        await cache.get_or_load("k", 60, loader)
        result = await cache.get_or_load("k", 60, loader)

        assert isinstance(result, Failure)
        assert loader.calls == 2
        assert len(cache) == 0

    async def test_keys_are_independent(self) -> None:
        cache = TTLCache(clock=FakeClock())

        await cache.get_or_load("a", 60, CountingLoader(Ok("A")))
        result = await cache.get_or_load("b", 60, CountingLoader(Ok("B")))

        assert result == Ok("B")
        assert len(cache) == 2

    async def test_invalidate_by_prefix(self) -> None:
        cache = TTLCache(clock=FakeClock())
        for key in ("collection:alice", "plays:alice", "collection:bob"):
            await cache.get_or_load(key, 60, CountingLoader(Ok(key)))

        cache.invalidate("collection:")

        assert len(cache) == 1
        loader = CountingLoader(Ok("fresh"))
        assert await cache.get_or_load("plays:alice", 60, loader) == Ok("plays:alice")
        assert loader.calls == 0
