"""Query cache module."""

from .infinite import InfiniteQuery
from .query import Query, QueryKey, QueryStatus
from .query_cache import QueryCache

__all__ = ["InfiniteQuery", "Query", "QueryCache", "QueryKey", "QueryStatus"]
