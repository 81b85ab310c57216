"""NIP-50 search against the dedicated search relay."""

import asyncio

from ..cancellation import run_cancellable
from ..logging_config import get_logger
from ..models import Label, NostrEvent
from ..transport import INostrClient
from .filters import build_posts_filter
from .options import SearchOptions

logger = get_logger(__name__)


async def fetch_search(
    client: INostrClient,
    options: SearchOptions,
    *,
    label: Label,
    search_relay: str,
    timeout: float,
    cancel_event: asyncio.Event | None = None,
) -> list[NostrEvent]:
    """
    Query `search_relay` with the search text.

    Covers top-level posts and replies alike. Results keep the relay's
    relevance order; nothing is re-ranked or re-filtered here.
    """
    search_filter = build_posts_filter(
        label,
        show_all=options.show_all,
        limit=options.limit,
        search=options.query,
    )
    logger.debug(
        "Searching %s", search_relay, extra={"context": search_filter.to_dict()}
    )

    return await run_cancellable(
        client.relay(search_relay).query([search_filter]),
        timeout=timeout,
        cancel_event=cancel_event,
    )
