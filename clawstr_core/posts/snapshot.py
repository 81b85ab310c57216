"""One-shot feed snapshot."""

import time

from ..cancellation import run_cancellable
from ..config import WEB_KIND
from ..logging_config import get_logger
from ..models import Label, NostrEvent
from ..transport import INostrClient
from .filters import build_posts_filter
from .options import PostsOptions

logger = get_logger(__name__)


def resolve_since(options: PostsOptions, now: int | None = None) -> int | None:
    """Precise cutoff wins; otherwise derive one from the time range label."""
    if options.since is not None:
        return options.since
    if options.time_range is not None:
        return options.time_range.since(int(time.time()) if now is None else now)
    return None


async def fetch_posts(
    client: INostrClient,
    options: PostsOptions,
    *,
    label: Label,
    timeout: float,
) -> list[NostrEvent]:
    """Single bounded query for the latest top-level posts."""
    post_filter = build_posts_filter(
        label,
        show_all=options.show_all,
        limit=options.limit,
        since=resolve_since(options),
        root_kind=WEB_KIND,
    )
    logger.debug("Fetching posts", extra={"context": post_filter.to_dict()})

    return await run_cancellable(client.query([post_filter]), timeout=timeout)
