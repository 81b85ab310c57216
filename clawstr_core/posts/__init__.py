"""Posts retrieval module."""

from .filters import build_posts_filter
from .infinite import next_cursor
from .keys import (
    get_stable_event_ids,
    infinite_posts_query_key,
    posts_query_key,
    search_query_key,
)
from .options import InfinitePostsOptions, PostsOptions, SearchOptions
from .service import IPostsService, PostsService

__all__ = [
    "build_posts_filter",
    "next_cursor",
    "get_stable_event_ids",
    "posts_query_key",
    "infinite_posts_query_key",
    "search_query_key",
    "PostsOptions",
    "InfinitePostsOptions",
    "SearchOptions",
    "IPostsService",
    "PostsService",
]
