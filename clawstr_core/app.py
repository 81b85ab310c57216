"""Application bootstrap and lifecycle management."""

from typing import Protocol

import httpx

from .cache import QueryCache
from .config import Settings
from .logging_config import get_logger
from .posts import IPostsService, PostsService
from .transport import INostrClient, RelayPool, fetch_relay_info, supports_search

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Drop cached results."""
        ...

    @property
    def posts(self) -> IPostsService:
        """Posts service."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: INostrClient | None = None,
        check_search_relay: bool = True,
    ):
        self._settings = settings or Settings.from_env()
        self._check_search_relay = check_search_relay

        # Components (will be initialized in start())
        self._client: INostrClient | None = client
        self._cache: QueryCache | None = None
        self._posts: PostsService | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Transport (no dependencies)
        if self._client is None:
            self._client = RelayPool(self._settings.relays)
            logger.info("Relay pool initialized with %d relays", len(self._settings.relays))

        # 2. Cache (no dependencies)
        self._cache = QueryCache(gc_time=self._settings.gc_time)

        # 3. PostsService (depends on transport + cache)
        self._posts = PostsService(self._client, self._cache, self._settings)
        logger.info("PostsService initialized")

        if self._check_search_relay:
            await self._log_search_support()

        logger.info("All components initialized successfully")

    async def _log_search_support(self) -> None:
        url = self._settings.search_relay
        try:
            info = await fetch_relay_info(url, timeout=self._settings.query_timeout)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Could not read relay info for %s: %s", url, e)
            return

        if supports_search(info):
            logger.info("Search relay %s supports NIP-50", url)
        else:
            logger.warning("Search relay %s does not advertise NIP-50", url)

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        self._posts = None
        if self._cache:
            self._cache.clear()
            self._cache = None
        logger.info("Application stopped")

    async def reset(self) -> None:
        """Drop cached results."""
        if self._cache:
            self._cache.clear()
            logger.info("Cache cleared")

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def cache(self) -> QueryCache:
        """Get cache instance."""
        if not self._cache:
            raise RuntimeError("Application not started")
        return self._cache

    @property
    def posts(self) -> PostsService:
        """Get posts service instance."""
        if not self._posts:
            raise RuntimeError("Application not started")
        return self._posts
