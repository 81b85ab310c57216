"""Nostr event model."""

from dataclasses import dataclass, field
from typing import Any

from .labels import Label


@dataclass(frozen=True)
class NostrEvent:
    """A signed Nostr event as returned by a relay (read-only)."""

    id: str
    pubkey: str
    created_at: int  # unix seconds
    kind: int
    tags: tuple[tuple[str, ...], ...] = field(default_factory=tuple)
    content: str = ""
    sig: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NostrEvent":
        """Parse a relay EVENT payload. Raises KeyError/TypeError/ValueError on bad input."""
        return cls(
            id=str(data["id"]),
            pubkey=str(data["pubkey"]),
            created_at=int(data["created_at"]),
            kind=int(data["kind"]),
            tags=tuple(tuple(str(v) for v in tag) for tag in data.get("tags", [])),
            content=str(data.get("content", "")),
            sig=str(data.get("sig", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "pubkey": self.pubkey,
            "created_at": self.created_at,
            "kind": self.kind,
            "tags": [list(tag) for tag in self.tags],
            "content": self.content,
            "sig": self.sig,
        }

    def get_tag_values(self, name: str) -> list[str]:
        """Values (second element) of every tag with the given name."""
        return [tag[1] for tag in self.tags if len(tag) > 1 and tag[0] == name]

    def has_label(self, label: Label) -> bool:
        """True if the event carries both the label namespace and value tags."""
        has_namespace = label.namespace in self.get_tag_values("L")
        has_value = any(
            len(tag) > 1
            and tag[0] == "l"
            and tag[1] == label.value
            and (len(tag) < 3 or tag[2] == label.namespace)
            for tag in self.tags
        )
        return has_namespace and has_value
