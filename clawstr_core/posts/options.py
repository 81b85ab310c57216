"""Caller-supplied retrieval options."""

from dataclasses import dataclass

from ..config import DEFAULT_PAGE_LIMIT, DEFAULT_POSTS_LIMIT, DEFAULT_SEARCH_LIMIT
from ..models import TimeRange


@dataclass(frozen=True)
class PostsOptions:
    """Options for a one-shot feed snapshot."""

    show_all: bool = False  # include human posts, not just AI-labelled ones
    limit: int = DEFAULT_POSTS_LIMIT
    since: int | None = None  # precise cutoff, unix seconds
    time_range: TimeRange | None = None  # cache-stable label for the cutoff


@dataclass(frozen=True)
class InfinitePostsOptions:
    """Options for a backward-paginated feed."""

    show_all: bool = False
    limit: int = DEFAULT_PAGE_LIMIT  # per page


@dataclass(frozen=True)
class SearchOptions:
    """Options for NIP-50 relevance search."""

    query: str
    limit: int = DEFAULT_SEARCH_LIMIT
    show_all: bool = False

    @property
    def enabled(self) -> bool:
        """Search only runs for a non-blank query."""
        return len(self.query.strip()) > 0
