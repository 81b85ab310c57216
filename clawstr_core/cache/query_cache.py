"""In-memory query cache: single flight per key, a staleness window and a gc window."""

import asyncio
import time
from typing import Awaitable, Callable, TypeVar

from ..config import GC_TIME
from ..logging_config import get_logger
from .infinite import FetchPage, GetNextPageParam, InfiniteQuery
from .query import Clock, Query, QueryKey, describe

logger = get_logger(__name__)

T = TypeVar("T")


class QueryCache:
    """
    Keyed store of queries and infinite queries.

    Entries left unused for `gc_time` seconds are dropped, unless a fetch is
    still running for them. Sweeps run lazily on access.
    """

    def __init__(self, clock: Clock = time.monotonic, gc_time: float = GC_TIME):
        self._clock = clock
        self.gc_time = gc_time
        self._queries: dict[QueryKey, Query] = {}
        self._infinite: dict[QueryKey, InfiniteQuery] = {}

    def __len__(self) -> int:
        return len(self._queries) + len(self._infinite)

    def collect_garbage(self) -> int:
        """Drop idle entries unused for `gc_time` seconds; return how many."""
        cutoff = self._clock() - self.gc_time
        removed = 0
        for entries in (self._queries, self._infinite):
            expired = [
                key
                for key, entry in entries.items()
                if not entry.is_fetching and entry.last_used_at <= cutoff
            ]
            for key in expired:
                del entries[key]
            removed += len(expired)
        if removed:
            logger.debug("Evicted %d idle queries", removed)
        return removed

    def get_query(self, key: QueryKey) -> Query:
        """Query handle for `key`, created on first access."""
        self.collect_garbage()
        key = tuple(key)
        query = self._queries.get(key)
        if query is None:
            query = Query(key, self._clock)
            self._queries[key] = query
        query.touch()
        return query

    def get_query_data(self, key: QueryKey):
        query = self._queries.get(tuple(key))
        return query.data if query else None

    async def fetch_query(
        self,
        key: QueryKey,
        fetch_fn: Callable[[], Awaitable[T]],
        stale_time: float,
        cancel_event: asyncio.Event | None = None,
    ) -> T:
        """
        Cached data if fresh, otherwise the result of one shared fetch.

        `cancel_event` releases this caller only; see `Query.fetch`.
        """
        query = self.get_query(key)
        if not query.is_stale(stale_time):
            logger.debug("Cache hit", extra={"context": describe(query)})
            return query.data
        return await query.fetch(fetch_fn, cancel_event)

    def infinite_query(
        self,
        key: QueryKey,
        fetch_page: FetchPage,
        get_next_page_param: GetNextPageParam,
        initial_page_param=None,
    ) -> InfiniteQuery:
        """Paginated session for `key`, created on first access."""
        self.collect_garbage()
        key = tuple(key)
        session = self._infinite.get(key)
        if session is None:
            session = InfiniteQuery(
                key,
                fetch_page=fetch_page,
                get_next_page_param=get_next_page_param,
                initial_page_param=initial_page_param,
                clock=self._clock,
            )
            self._infinite[key] = session
        session.touch()
        return session

    def invalidate(self, prefix: QueryKey = ()) -> int:
        """Mark every entry whose key starts with `prefix` as stale."""
        prefix = tuple(prefix)
        count = 0
        for entries in (self._queries, self._infinite):
            for key, entry in entries.items():
                if key[: len(prefix)] == prefix:
                    entry.invalidate()
                    count += 1
        logger.info("Invalidated %d queries with prefix %s", count, prefix)
        return count

    def clear(self) -> None:
        """Drop every entry."""
        self._queries.clear()
        self._infinite.clear()
