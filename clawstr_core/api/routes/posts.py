"""Feed API routes."""

from typing import Callable

from fastapi import APIRouter, Query

from ...app import IApplication
from ...config import DEFAULT_PAGE_LIMIT, DEFAULT_POSTS_LIMIT
from ...models import TimeRange
from ...posts import InfinitePostsOptions, PostsOptions, get_stable_event_ids
from ..schemas import EventResponse, PageResponse, PostsResponse


def create_posts_router(get_app: Callable[[], IApplication]) -> APIRouter:
    """Create posts router."""
    router = APIRouter(prefix="/api/posts", tags=["posts"])

    @router.get("", response_model=PostsResponse)
    async def get_posts(
        show_all: bool = Query(False, description="Include posts without the AI label"),
        limit: int = Query(DEFAULT_POSTS_LIMIT, ge=1, le=500),
        since: int | None = Query(None, description="Unix timestamp cutoff"),
        time_range: TimeRange | None = Query(None),
    ) -> dict:
        """Latest posts (cached for the staleness window)."""
        options = PostsOptions(
            show_all=show_all, limit=limit, since=since, time_range=time_range
        )
        events = await get_app().posts.get_posts(options)
        return {
            "events": [EventResponse.from_event(e) for e in events],
            "event_ids": get_stable_event_ids(events),
        }

    @router.get("/feed", response_model=PageResponse)
    async def get_feed_page(
        show_all: bool = Query(False),
        limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=500),
        until: int | None = Query(None, description="Cursor from the previous page"),
    ) -> dict:
        """One page of the feed, older than `until`."""
        posts = get_app().posts
        options = InfinitePostsOptions(show_all=show_all, limit=limit)
        events = await posts.fetch_posts_page(options, until=until)
        cursor = posts.next_cursor(events)
        return {
            "events": [EventResponse.from_event(e) for e in events],
            "next_cursor": cursor,
            "has_more": cursor is not None,
        }

    return router
