"""PostsService: cached entry points for feed, infinite feed and search."""

import asyncio
from functools import partial
from typing import Protocol

from ..cache import InfiniteQuery, QueryCache
from ..config import Settings
from ..logging_config import get_logger
from ..models import NostrEvent
from ..transport import INostrClient
from .infinite import fetch_posts_page, next_cursor
from .keys import infinite_posts_query_key, posts_query_key, search_query_key
from .options import InfinitePostsOptions, PostsOptions, SearchOptions
from .search import fetch_search
from .snapshot import fetch_posts

logger = get_logger(__name__)


class IPostsService(Protocol):
    """Retrieval of Clawstr posts."""

    async def get_posts(self, options: PostsOptions) -> list[NostrEvent]:
        """Latest posts, served from cache while fresh."""
        ...

    def posts_infinite(self, options: InfinitePostsOptions) -> InfiniteQuery:
        """Paginated feed session shared by identical options."""
        ...

    async def fetch_posts_page(
        self,
        options: InfinitePostsOptions,
        until: int | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> list[NostrEvent]:
        """One uncached page older than `until`."""
        ...

    def next_cursor(self, page: list[NostrEvent]) -> int | None:
        """Cursor for the page after `page`; None ends pagination."""
        ...

    async def search_posts(
        self,
        options: SearchOptions,
        cancel_event: asyncio.Event | None = None,
    ) -> list[NostrEvent] | None:
        """Search results, or None when the query is blank."""
        ...


class PostsService:
    """Builds filters, runs them through the transport, caches the results."""

    def __init__(
        self,
        client: INostrClient,
        cache: QueryCache,
        settings: Settings | None = None,
    ):
        self._client = client
        self._cache = cache
        self._settings = settings or Settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    # Snapshot
    async def fetch_posts(self, options: PostsOptions) -> list[NostrEvent]:
        """Uncached snapshot fetch."""
        return await fetch_posts(
            self._client,
            options,
            label=self._settings.label,
            timeout=self._settings.query_timeout,
        )

    async def get_posts(self, options: PostsOptions) -> list[NostrEvent]:
        """Latest posts, served from cache while fresh."""
        return await self._cache.fetch_query(
            posts_query_key(options),
            partial(self.fetch_posts, options),
            stale_time=self._settings.stale_time,
        )

    # Pagination
    async def fetch_posts_page(
        self,
        options: InfinitePostsOptions,
        until: int | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> list[NostrEvent]:
        """One uncached page older than `until`."""
        return await fetch_posts_page(
            self._client,
            options,
            label=self._settings.label,
            timeout=self._settings.query_timeout,
            until=until,
            cancel_event=cancel_event,
        )

    def next_cursor(self, page: list[NostrEvent]) -> int | None:
        return next_cursor(page, inclusive_until=self._settings.inclusive_until)

    def posts_infinite(self, options: InfinitePostsOptions) -> InfiniteQuery:
        """Paginated feed session shared by identical options."""

        async def fetch_page(until: int | None) -> list[NostrEvent]:
            return await self.fetch_posts_page(options, until)

        return self._cache.infinite_query(
            infinite_posts_query_key(options),
            fetch_page=fetch_page,
            get_next_page_param=self.next_cursor,
            initial_page_param=None,
        )

    # Search
    async def fetch_search(
        self,
        options: SearchOptions,
        cancel_event: asyncio.Event | None = None,
    ) -> list[NostrEvent]:
        """Uncached search; does not check for a blank query."""
        return await fetch_search(
            self._client,
            options,
            label=self._settings.label,
            search_relay=self._settings.search_relay,
            timeout=self._settings.query_timeout,
            cancel_event=cancel_event,
        )

    async def search_posts(
        self,
        options: SearchOptions,
        cancel_event: asyncio.Event | None = None,
    ) -> list[NostrEvent] | None:
        """Search results, or None when the query is blank."""
        if not options.enabled:
            logger.debug("Search skipped: blank query")
            return None

        return await self._cache.fetch_query(
            search_query_key(options),
            partial(self.fetch_search, options),
            stale_time=self._settings.stale_time,
            cancel_event=cancel_event,
        )
