"""Error types raised by the retrieval layer."""


class FeedError(Exception):
    """Base class for feed retrieval failures."""


class TransportError(FeedError):
    """Network or relay failure reported by the transport."""


class RelayClosedError(TransportError):
    """Relay refused or closed the subscription."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Relay {url} closed subscription: {reason}")
        self.url = url
        self.reason = reason


class QueryTimeoutError(FeedError):
    """Query did not finish within its time bound."""

    def __init__(self, timeout: float):
        super().__init__(f"Query timed out after {timeout:g}s")
        self.timeout = timeout


class QueryCancelledError(FeedError):
    """Query was aborted by an external cancellation signal."""
