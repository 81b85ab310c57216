"""Nostr REQ filter model."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class NostrFilter:
    """A NIP-01 filter. Built once per request and never mutated."""

    kinds: tuple[int, ...] = ()
    tags: Mapping[str, tuple[str, ...]] = field(default_factory=dict)  # "#l" -> values
    since: int | None = None
    until: int | None = None
    search: str | None = None  # NIP-50
    limit: int | None = None

    def __post_init__(self):
        # Copy so later changes to the caller's dict cannot leak in
        tags = MappingProxyType({key: tuple(values) for key, values in self.tags.items()})
        object.__setattr__(self, "tags", tags)
        object.__setattr__(self, "kinds", tuple(self.kinds))

    def to_dict(self) -> dict[str, Any]:
        """Wire representation; absent fields are omitted."""
        data: dict[str, Any] = {}
        if self.kinds:
            data["kinds"] = list(self.kinds)
        for key, values in self.tags.items():
            data[key] = list(values)
        if self.since is not None:
            data["since"] = self.since
        if self.until is not None:
            data["until"] = self.until
        if self.search is not None:
            data["search"] = self.search
        if self.limit is not None:
            data["limit"] = self.limit
        return data
