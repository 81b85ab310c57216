"""API response models."""

from pydantic import BaseModel

from ..models import NostrEvent


class EventResponse(BaseModel):
    """A Nostr event as JSON."""

    id: str
    pubkey: str
    created_at: int
    kind: int
    tags: list[list[str]]
    content: str
    sig: str

    @classmethod
    def from_event(cls, event: NostrEvent) -> "EventResponse":
        return cls(**event.to_dict())


class PostsResponse(BaseModel):
    """Snapshot of the feed."""

    events: list[EventResponse]
    event_ids: list[str]


class PageResponse(BaseModel):
    """One page of the paginated feed."""

    events: list[EventResponse]
    next_cursor: int | None
    has_more: bool


class SearchResponse(BaseModel):
    """Search results; `enabled` is false for a blank query."""

    enabled: bool
    events: list[EventResponse]


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str
