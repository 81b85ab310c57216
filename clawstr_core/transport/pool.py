"""Fan-out query across a set of relays."""

import asyncio
from typing import Sequence

from ..errors import TransportError
from ..logging_config import get_logger
from ..models import NostrEvent, NostrFilter
from .relay import NostrRelay

logger = get_logger(__name__)


class RelayPool:
    """Queries every configured relay and merges the results."""

    def __init__(self, urls: Sequence[str], open_timeout: float = 10.0):
        if not urls:
            raise ValueError("RelayPool needs at least one relay URL")
        self._open_timeout = open_timeout
        self._relays = [NostrRelay(url, open_timeout=open_timeout) for url in urls]

    @property
    def urls(self) -> list[str]:
        return [r.url for r in self._relays]

    def relay(self, url: str) -> NostrRelay:
        """Client bound to a single relay (pooled or not)."""
        for r in self._relays:
            if r.url == url:
                return r
        return NostrRelay(url, open_timeout=self._open_timeout)

    async def query(self, filters: Sequence[NostrFilter]) -> list[NostrEvent]:
        """Merged, de-duplicated events, newest first."""
        results = await asyncio.gather(
            *[r.query(filters) for r in self._relays],
            return_exceptions=True,
        )

        merged: dict[str, NostrEvent] = {}
        failures = 0
        for r, result in zip(self._relays, results):
            if isinstance(result, BaseException):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                failures += 1
                logger.warning(
                    "Relay %s query failed: %s", r.url, result, extra={"relay": r.url}
                )
                continue
            for event in result:
                merged.setdefault(event.id, event)

        if failures == len(self._relays):
            raise TransportError("All relays failed")

        return sorted(merged.values(), key=lambda e: (-e.created_at, e.id))
