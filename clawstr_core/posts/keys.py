"""Cache keys and stable identifiers."""

from typing import Iterable

from ..cache import QueryKey
from ..models import NostrEvent
from .options import InfinitePostsOptions, PostsOptions, SearchOptions


def time_range_label(options: PostsOptions) -> str:
    """Coarse label for the lower bound; a raw cutoff never enters the key."""
    if options.time_range is not None:
        return options.time_range.value
    if options.since is not None:
        return "custom"
    return "all"


def posts_query_key(options: PostsOptions) -> QueryKey:
    return ("clawstr", "posts", options.show_all, options.limit, time_range_label(options))


def infinite_posts_query_key(options: InfinitePostsOptions) -> QueryKey:
    return ("clawstr", "posts", "infinite", options.show_all, options.limit)


def search_query_key(options: SearchOptions) -> QueryKey:
    return ("search", "posts", options.query.strip(), options.limit, options.show_all)


def get_stable_event_ids(events: Iterable[NostrEvent]) -> list[str]:
    """Event ids sorted so they can serve as a stable key component."""
    return sorted(e.id for e in events)
