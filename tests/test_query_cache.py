"""Tests for QueryCache."""

import asyncio

import pytest

from clawstr_core.cache import QueryCache, QueryStatus
from clawstr_core.errors import QueryCancelledError


class TestFetchQuery:
    """Tests for staleness and single-flight fetching."""

    @pytest.mark.asyncio
    async def test_fresh_data_is_reused(self, cache, clock):
        """Test that a fresh entry is returned without fetching."""
        calls = []

        async def fetch():
            calls.append(1)
            return ["a"]

        assert await cache.fetch_query(("k",), fetch, stale_time=30) == ["a"]
        clock.advance(29)
        assert await cache.fetch_query(("k",), fetch, stale_time=30) == ["a"]
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_stale_data_is_refetched(self, cache, clock):
        """Test that an entry past its window is fetched again."""
        results = iter([["old"], ["new"]])

        async def fetch():
            return next(results)

        await cache.fetch_query(("k",), fetch, stale_time=30)
        clock.advance(30)
        assert await cache.fetch_query(("k",), fetch, stale_time=30) == ["new"]

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_fetch(self, cache):
        """Test at most one in-flight fetch per key."""
        calls = []
        gate = asyncio.Event()

        async def fetch():
            calls.append(1)
            await gate.wait()
            return ["x"]

        tasks = [
            asyncio.create_task(cache.fetch_query(("k",), fetch, stale_time=30))
            for _ in range(5)
        ]
        await asyncio.sleep(0)
        assert cache.get_query(("k",)).is_fetching
        gate.set()

        results = await asyncio.gather(*tasks)
        assert results == [["x"]] * 5
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_different_keys_fetch_separately(self, cache):
        """Test that distinct keys do not share fetches."""
        calls = []

        async def fetch():
            calls.append(1)
            return []

        await asyncio.gather(
            cache.fetch_query(("a",), fetch, stale_time=30),
            cache.fetch_query(("b",), fetch, stale_time=30),
        )
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_failure_reaches_every_waiter_and_is_not_cached(self, cache):
        """Test that errors propagate and the next call retries."""
        attempts = []

        async def fetch():
            attempts.append(1)
            if len(attempts) == 1:
                await asyncio.sleep(0)
                raise RuntimeError("relay down")
            return ["ok"]

        results = await asyncio.gather(
            cache.fetch_query(("k",), fetch, stale_time=30),
            cache.fetch_query(("k",), fetch, stale_time=30),
            return_exceptions=True,
        )
        assert all(isinstance(r, RuntimeError) for r in results)

        query = cache.get_query(("k",))
        assert query.status == QueryStatus.ERROR

        assert await cache.fetch_query(("k",), fetch, stale_time=30) == ["ok"]
        assert query.status == QueryStatus.SUCCESS
        assert query.error is None

    @pytest.mark.asyncio
    async def test_failed_refetch_keeps_previous_data(self, cache, clock):
        """Test that earlier data stays readable after a failed refresh."""

        async def ok():
            return ["cached"]

        async def fail():
            raise RuntimeError("timeout")

        await cache.fetch_query(("k",), ok, stale_time=30)
        clock.advance(31)

        with pytest.raises(RuntimeError):
            await cache.fetch_query(("k",), fail, stale_time=30)

        assert cache.get_query_data(("k",)) == ["cached"]

    @pytest.mark.asyncio
    async def test_cancelled_waiter_leaves_fetch_running(self, cache):
        """Test that one waiter's cancel event does not fail the others."""
        gate = asyncio.Event()
        cancel = asyncio.Event()

        async def fetch():
            await gate.wait()
            return ["x"]

        first = asyncio.create_task(cache.fetch_query(("k",), fetch, 30, cancel))
        second = asyncio.create_task(cache.fetch_query(("k",), fetch, 30))
        await asyncio.sleep(0)
        cancel.set()
        with pytest.raises(QueryCancelledError):
            await first
        assert cache.get_query(("k",)).is_fetching

        gate.set()
        assert await second == ["x"]
        assert cache.get_query(("k",)).status == QueryStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_abandoned_fetch_keeps_previous_state(self, cache, clock):
        """Test that a fetch cancelled by its only waiter changes nothing."""
        started = []

        async def ok():
            return ["cached"]

        async def hang():
            started.append(1)
            await asyncio.Event().wait()

        await cache.fetch_query(("k",), ok, stale_time=30)
        clock.advance(31)

        cancel = asyncio.Event()
        task = asyncio.create_task(cache.fetch_query(("k",), hang, 30, cancel))
        await asyncio.sleep(0)
        cancel.set()
        with pytest.raises(QueryCancelledError):
            await task

        query = cache.get_query(("k",))
        assert started == [1]
        assert not query.is_fetching
        assert query.status == QueryStatus.SUCCESS
        assert query.data == ["cached"]

    @pytest.mark.asyncio
    async def test_task_cancellation_releases_waiter(self, cache):
        """Test that cancelling a waiting task leaves the shared fetch alone."""
        gate = asyncio.Event()

        async def fetch():
            await gate.wait()
            return ["x"]

        first = asyncio.create_task(cache.fetch_query(("k",), fetch, 30))
        second = asyncio.create_task(cache.fetch_query(("k",), fetch, 30))
        await asyncio.sleep(0)
        first.cancel()
        with pytest.raises(asyncio.CancelledError):
            await first

        gate.set()
        assert await second == ["x"]


class TestInvalidate:
    """Tests for invalidate() and clear()."""

    @pytest.mark.asyncio
    async def test_invalidate_by_prefix(self, cache):
        """Test that only matching keys become stale."""

        async def fetch():
            return []

        await cache.fetch_query(("clawstr", "posts", False), fetch, stale_time=30)
        await cache.fetch_query(("search", "posts", "fox"), fetch, stale_time=30)

        assert cache.invalidate(("clawstr",)) == 1
        assert cache.get_query(("clawstr", "posts", False)).is_stale(30)
        assert not cache.get_query(("search", "posts", "fox")).is_stale(30)

    @pytest.mark.asyncio
    async def test_clear(self, cache):
        """Test that clear drops data."""

        async def fetch():
            return ["x"]

        await cache.fetch_query(("k",), fetch, stale_time=30)
        cache.clear()
        assert cache.get_query_data(("k",)) is None


class TestGarbageCollection:
    """Tests for eviction of idle entries."""

    @pytest.mark.asyncio
    async def test_idle_searches_are_evicted(self, cache, clock):
        """Test that many one-off keys do not accumulate."""

        async def fetch():
            return []

        for i in range(200):
            await cache.fetch_query(("search", "posts", f"q{i}"), fetch, stale_time=30)
        assert len(cache) == 200

        clock.advance(3600)
        assert cache.collect_garbage() == 200
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_access_sweeps(self, cache, clock):
        """Test that looking up any key evicts expired ones."""

        async def fetch():
            return ["old"]

        await cache.fetch_query(("a",), fetch, stale_time=30)
        clock.advance(cache.gc_time)
        cache.get_query(("b",))

        assert len(cache) == 1
        assert cache.get_query_data(("a",)) is None

    @pytest.mark.asyncio
    async def test_recent_use_extends_lifetime(self, cache, clock):
        """Test that a cache hit counts as use."""

        async def fetch():
            return ["x"]

        await cache.fetch_query(("k",), fetch, stale_time=600)
        clock.advance(200)
        await cache.fetch_query(("k",), fetch, stale_time=600)
        clock.advance(200)

        assert cache.collect_garbage() == 0
        assert cache.get_query_data(("k",)) == ["x"]

    @pytest.mark.asyncio
    async def test_fetching_entry_is_kept(self, cache, clock):
        """Test that an entry with a fetch in flight survives a sweep."""
        gate = asyncio.Event()

        async def fetch():
            await gate.wait()
            return ["x"]

        task = asyncio.create_task(cache.fetch_query(("k",), fetch, stale_time=30))
        await asyncio.sleep(0)
        clock.advance(3600)

        assert cache.collect_garbage() == 0
        gate.set()
        assert await task == ["x"]
        assert cache.get_query_data(("k",)) == ["x"]

    def test_idle_infinite_sessions_are_evicted(self, clock):
        """Test that paginated sessions share the gc window."""
        cache = QueryCache(clock=clock, gc_time=60)
        session = cache.infinite_query(("feed",), None, None)

        clock.advance(59)
        assert cache.infinite_query(("feed",), None, None) is session
        clock.advance(60)
        assert cache.infinite_query(("feed",), None, None) is not session
