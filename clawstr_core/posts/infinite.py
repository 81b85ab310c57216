"""Backward pagination over the feed using an "until" cursor."""

import asyncio

from ..cancellation import run_cancellable
from ..config import WEB_KIND
from ..logging_config import get_logger
from ..models import Label, NostrEvent
from ..transport import INostrClient
from .filters import build_posts_filter
from .options import InfinitePostsOptions

logger = get_logger(__name__)


def next_cursor(page: list[NostrEvent], inclusive_until: bool = True) -> int | None:
    """
    Cursor for the page after `page`, or None when `page` is empty.

    Uses the oldest timestamp in the page regardless of its order. With an
    inclusive "until" the cursor steps one second past it so the boundary
    event is not fetched again.
    """
    if not page:
        return None
    oldest = min(e.created_at for e in page)
    return oldest - 1 if inclusive_until else oldest


async def fetch_posts_page(
    client: INostrClient,
    options: InfinitePostsOptions,
    *,
    label: Label,
    timeout: float,
    until: int | None = None,
    cancel_event: asyncio.Event | None = None,
) -> list[NostrEvent]:
    """One page of posts older than `until` (newest page when None)."""
    page_filter = build_posts_filter(
        label,
        show_all=options.show_all,
        limit=options.limit,
        until=until,
        root_kind=WEB_KIND,
    )
    logger.debug("Fetching page", extra={"context": page_filter.to_dict()})

    return await run_cancellable(
        client.query([page_filter]),
        timeout=timeout,
        cancel_event=cancel_event,
    )
