"""Cursor-driven page accumulation for infinite feeds."""

import asyncio
from typing import Awaitable, Callable, Generic, TypeVar

from ..logging_config import get_logger
from .query import Clock, QueryKey
from .shared import SharedFetch

logger = get_logger(__name__)

TPage = TypeVar("TPage")
TParam = TypeVar("TParam")

FetchPage = Callable[[TParam | None], Awaitable[TPage]]
GetNextPageParam = Callable[[TPage], TParam | None]


def _running(shared: SharedFetch | None) -> bool:
    return shared is not None and not shared.future.done()


class InfiniteQuery(Generic[TPage, TParam]):
    """
    Accumulated pages of one paginated query.

    Each page is fetched with the param derived from the page before it.
    A failed fetch leaves `pages` and `page_params` exactly as they were,
    so the same next-page call can simply be retried.
    """

    def __init__(
        self,
        key: QueryKey,
        fetch_page: FetchPage,
        get_next_page_param: GetNextPageParam,
        initial_page_param: TParam | None,
        clock: Clock,
    ):
        self.key = key
        self._fetch_page = fetch_page
        self._get_next_page_param = get_next_page_param
        self._initial_page_param = initial_page_param
        self._clock = clock

        self.pages: list[TPage] = []
        self.page_params: list[TParam | None] = []
        self.error: BaseException | None = None
        self.data_updated_at: float | None = None
        self.last_used_at = clock()
        self._invalidated = False
        self._next_in_flight: SharedFetch[TPage] | None = None
        self._refetch_in_flight: SharedFetch[list[TPage]] | None = None

    @property
    def next_page_param(self) -> TParam | None:
        if not self.pages:
            return self._initial_page_param
        return self._get_next_page_param(self.pages[-1])

    @property
    def has_next_page(self) -> bool:
        """False once the last fetched page yields no next param."""
        if not self.pages:
            return True
        return self.next_page_param is not None

    @property
    def is_fetching_next_page(self) -> bool:
        return _running(self._next_in_flight)

    @property
    def is_refetching(self) -> bool:
        return _running(self._refetch_in_flight)

    @property
    def is_fetching(self) -> bool:
        return self.is_fetching_next_page or self.is_refetching

    def is_stale(self, stale_time: float) -> bool:
        if self.data_updated_at is None or self._invalidated:
            return True
        return self._clock() - self.data_updated_at >= stale_time

    def invalidate(self) -> None:
        self._invalidated = True

    def touch(self) -> None:
        self.last_used_at = self._clock()

    async def fetch_next_page(
        self, cancel_event: asyncio.Event | None = None
    ) -> TPage | None:
        """
        Fetch and append the next page.

        Returns None without fetching when the feed is exhausted. Concurrent
        calls share one fetch; `cancel_event` releases only its own caller,
        and the fetch is cancelled once no caller is waiting on it.
        """
        while self.is_refetching:
            await asyncio.wait({self._refetch_in_flight.future})

        shared = self._next_in_flight
        if shared is None or not shared.joinable:
            if not self.has_next_page:
                return None
            shared = SharedFetch(self._next())
            self._next_in_flight = shared
        try:
            return await shared.join(cancel_event)
        finally:
            self.touch()

    async def _next(self) -> TPage:
        shared = self._next_in_flight
        param = self.next_page_param
        try:
            page = await self._fetch_page(param)
        except Exception as e:
            self.error = e
            logger.warning(
                "Page fetch (param=%s) failed: %s", param, e, extra={"query_key": self.key}
            )
            raise
        else:
            self.pages.append(page)
            self.page_params.append(param)
            self.error = None
            self.data_updated_at = self._clock()
            self._invalidated = False
            return page
        finally:
            if self._next_in_flight is shared:
                self._next_in_flight = None

    async def refetch(self, cancel_event: asyncio.Event | None = None) -> list[TPage]:
        """
        Re-fetch as many pages as are loaded, starting again from the first.

        Pages are committed only when every page succeeds.
        """
        shared = self._refetch_in_flight
        if shared is None or not shared.joinable:
            while self.is_fetching_next_page:
                await asyncio.wait({self._next_in_flight.future})
            shared = self._refetch_in_flight
            if shared is None or not shared.joinable:
                shared = SharedFetch(self._refetch_all())
                self._refetch_in_flight = shared
        try:
            return await shared.join(cancel_event)
        finally:
            self.touch()

    async def _refetch_all(self) -> list[TPage]:
        shared = self._refetch_in_flight
        count = max(len(self.pages), 1)
        pages: list[TPage] = []
        params: list[TParam | None] = []
        param = self._initial_page_param
        try:
            for _ in range(count):
                page = await self._fetch_page(param)
                pages.append(page)
                params.append(param)
                param = self._get_next_page_param(page)
                if param is None:
                    break
        except Exception as e:
            self.error = e
            raise
        else:
            self.pages = pages
            self.page_params = params
            self.error = None
            self.data_updated_at = self._clock()
            self._invalidated = False
            return pages
        finally:
            if self._refetch_in_flight is shared:
                self._refetch_in_flight = None
