"""Transport interface consumed by the retrieval layer."""

from typing import Protocol, Sequence

from ..models import NostrEvent, NostrFilter


class INostrClient(Protocol):
    """Executes filters against one or more relays.

    Cancellation is task cancellation: cancelling the awaiting task aborts
    the query and releases its connection.
    """

    async def query(self, filters: Sequence[NostrFilter]) -> list[NostrEvent]:
        """Run filters and return matching events."""
        ...

    def relay(self, url: str) -> "INostrClient":
        """Client bound to a single named relay."""
        ...
