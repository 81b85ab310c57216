"""Filter construction shared by every retrieval path."""

from ..config import POST_KIND
from ..models import Label, NostrFilter


def build_posts_filter(
    label: Label,
    *,
    show_all: bool,
    limit: int,
    since: int | None = None,
    until: int | None = None,
    search: str | None = None,
    root_kind: str | None = None,
) -> NostrFilter:
    """
    Build the REQ filter for Clawstr posts.

    Unless `show_all` is set, the filter is narrowed to events carrying
    `label`: both the "#l" value and the "#L" namespace, never one alone.
    Inputs are passed through as given.
    """
    tags: dict[str, tuple[str, ...]] = {}
    if root_kind is not None:
        tags["#K"] = (root_kind,)
    if not show_all:
        tags["#l"] = (label.value,)
        tags["#L"] = (label.namespace,)

    return NostrFilter(
        kinds=(POST_KIND,),
        tags=tags,
        since=since,
        until=until,
        search=search,
        limit=limit,
    )
