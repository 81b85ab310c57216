"""Search API routes."""

from typing import Callable

from fastapi import APIRouter, Query

from ...app import IApplication
from ...config import DEFAULT_SEARCH_LIMIT
from ...posts import SearchOptions
from ..schemas import EventResponse, SearchResponse


def create_search_router(get_app: Callable[[], IApplication]) -> APIRouter:
    """Create search router."""
    router = APIRouter(prefix="/api", tags=["search"])

    @router.get("/search", response_model=SearchResponse)
    async def search_posts(
        q: str = Query("", description="Search text"),
        limit: int = Query(DEFAULT_SEARCH_LIMIT, ge=1, le=500),
        show_all: bool = Query(False),
    ) -> dict:
        """Relevance search; a blank query is not executed."""
        events = await get_app().posts.search_posts(
            SearchOptions(query=q, limit=limit, show_all=show_all)
        )
        if events is None:
            return {"enabled": False, "events": []}
        return {
            "enabled": True,
            "events": [EventResponse.from_event(e) for e in events],
        }

    return router
