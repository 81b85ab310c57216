"""Clawstr feed retrieval core."""

from .app import Application, IApplication
from .cache import InfiniteQuery, Query, QueryCache, QueryStatus
from .config import AI_LABEL, Settings
from .errors import (
    FeedError,
    QueryCancelledError,
    QueryTimeoutError,
    RelayClosedError,
    TransportError,
)
from .models import Label, NostrEvent, NostrFilter, TimeRange
from .posts import (
    InfinitePostsOptions,
    IPostsService,
    PostsOptions,
    PostsService,
    SearchOptions,
    build_posts_filter,
    get_stable_event_ids,
)
from .transport import INostrClient, NostrRelay, RelayPool

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    "AI_LABEL",
    # Models
    "NostrEvent",
    "NostrFilter",
    "Label",
    "TimeRange",
    # Errors
    "FeedError",
    "TransportError",
    "RelayClosedError",
    "QueryTimeoutError",
    "QueryCancelledError",
    # Components
    "INostrClient",
    "NostrRelay",
    "RelayPool",
    "QueryCache",
    "Query",
    "QueryStatus",
    "InfiniteQuery",
    "IPostsService",
    "PostsService",
    "PostsOptions",
    "InfinitePostsOptions",
    "SearchOptions",
    "build_posts_filter",
    "get_stable_event_ids",
]
