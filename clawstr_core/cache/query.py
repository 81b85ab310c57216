"""Cached query handle with single-flight fetching."""

import asyncio
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Hashable, TypeVar

from ..logging_config import get_logger
from .shared import SharedFetch

logger = get_logger(__name__)

T = TypeVar("T")

QueryKey = tuple[Hashable, ...]
Clock = Callable[[], float]


class QueryStatus(str, Enum):
    """Lifecycle of a cached query."""

    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class Query(Generic[T]):
    """One cache entry: last data, last error, and the in-flight fetch."""

    def __init__(self, key: QueryKey, clock: Clock):
        self.key = key
        self._clock = clock
        self.status = QueryStatus.PENDING
        self.data: T | None = None
        self.error: BaseException | None = None
        self.data_updated_at: float | None = None
        self.last_used_at = clock()
        self._invalidated = False
        self._in_flight: SharedFetch[T] | None = None

    @property
    def is_fetching(self) -> bool:
        return self._in_flight is not None and not self._in_flight.future.done()

    def is_stale(self, stale_time: float) -> bool:
        """No data yet, invalidated, or older than `stale_time` seconds."""
        if self.data_updated_at is None or self._invalidated:
            return True
        return self._clock() - self.data_updated_at >= stale_time

    def invalidate(self) -> None:
        self._invalidated = True

    def touch(self) -> None:
        self.last_used_at = self._clock()

    async def fetch(
        self,
        fetch_fn: Callable[[], Awaitable[T]],
        cancel_event: asyncio.Event | None = None,
    ) -> T:
        """
        Run `fetch_fn`, or join the fetch already in flight.

        `cancel_event` releases only this caller; the fetch is cancelled
        once every caller waiting on it has gone.
        """
        shared = self._in_flight
        if shared is None or not shared.joinable:
            shared = SharedFetch(self._run(fetch_fn))
            self._in_flight = shared
        try:
            return await shared.join(cancel_event)
        finally:
            self.touch()

    async def _run(self, fetch_fn: Callable[[], Awaitable[T]]) -> T:
        shared = self._in_flight
        try:
            data = await fetch_fn()
        except asyncio.CancelledError:
            # Abandoned by every caller: keep whatever state we had
            logger.debug("Query abandoned", extra={"query_key": self.key})
            raise
        except Exception as e:
            self.status = QueryStatus.ERROR
            self.error = e
            logger.debug("Query failed: %s", e, extra={"query_key": self.key})
            raise
        else:
            self.status = QueryStatus.SUCCESS
            self.data = data
            self.error = None
            self.data_updated_at = self._clock()
            self._invalidated = False
            return data
        finally:
            if self._in_flight is shared:
                self._in_flight = None

    def __repr__(self) -> str:
        return f"Query(key={self.key!r}, status={self.status.value})"


def describe(query: "Query[Any]") -> dict:
    """Loggable summary of a query's state."""
    return {
        "key": list(query.key),
        "status": query.status.value,
        "is_fetching": query.is_fetching,
        "data_updated_at": query.data_updated_at,
    }
