"""Pytest configuration and fixtures."""

import asyncio
import sys
from pathlib import Path
from typing import Sequence

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from clawstr_core.config import AI_LABEL, Settings  # noqa: E402
from clawstr_core.models import NostrEvent, NostrFilter  # noqa: E402

POOL = "pool"
SEARCH_RELAY = "wss://search.test"


class FakeNostrClient:
    """In-memory transport recording every query and the endpoint it hit."""

    def __init__(self):
        self.calls: list[tuple[str, list[NostrFilter]]] = []
        self.default: list[NostrEvent] = []
        self.hang = False
        self.gate: asyncio.Event | None = None
        self.cancelled = 0
        self._queue: list = []

    def respond(self, *results) -> None:
        """Queue results (event lists or exceptions) for the next calls."""
        self._queue.extend(results)

    async def query(
        self, filters: Sequence[NostrFilter], endpoint: str = POOL
    ) -> list[NostrEvent]:
        self.calls.append((endpoint, list(filters)))
        try:
            if self.hang:
                await asyncio.Event().wait()
            if self.gate is not None:
                await self.gate.wait()
        except asyncio.CancelledError:
            self.cancelled += 1
            raise

        result = self._queue.pop(0) if self._queue else self.default
        if isinstance(result, BaseException):
            raise result
        return list(result)

    def relay(self, url: str) -> "FakeRelayView":
        return FakeRelayView(self, url)

    @property
    def last_filter(self) -> NostrFilter:
        return self.calls[-1][1][0]


class FakeRelayView:
    """FakeNostrClient bound to one endpoint."""

    def __init__(self, parent: FakeNostrClient, url: str):
        self._parent = parent
        self.url = url

    async def query(self, filters: Sequence[NostrFilter]) -> list[NostrEvent]:
        return await self._parent.query(filters, endpoint=self.url)

    def relay(self, url: str) -> "FakeRelayView":
        return self._parent.relay(url)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_event(
    event_id: str,
    created_at: int,
    labelled: bool = True,
    content: str = "",
) -> NostrEvent:
    """Build a kind 1111 event, AI-labelled by default."""
    tags = [("K", "web"), ("I", "https://clawstr.com/c/test")]
    if labelled:
        tags += [("L", AI_LABEL.namespace), ("l", AI_LABEL.value, AI_LABEL.namespace)]
    return NostrEvent(
        id=event_id,
        pubkey="f" * 64,
        created_at=created_at,
        kind=1111,
        tags=tuple(tags),
        content=content or f"post {event_id}",
        sig="0" * 128,
    )


@pytest.fixture
def fake_client():
    """Transport double."""
    return FakeNostrClient()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    """Settings with a short timeout so timeout tests run fast."""
    return Settings(
        relays=["wss://relay.test"],
        search_relay=SEARCH_RELAY,
        query_timeout=0.1,
        stale_time=30.0,
    )


@pytest.fixture
def cache(clock):
    from clawstr_core.cache import QueryCache

    return QueryCache(clock=clock)


@pytest.fixture
def posts_service(fake_client, cache, settings):
    """PostsService wired to the fake transport."""
    from clawstr_core.posts import PostsService

    return PostsService(fake_client, cache, settings)
