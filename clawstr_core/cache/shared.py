"""A fetch awaited by several callers, cancelled only when all of them leave."""

import asyncio
from typing import Awaitable, Generic, TypeVar

from ..errors import QueryCancelledError

T = TypeVar("T")


def _consume(future: asyncio.Future) -> None:
    # An abandoned fetch has nobody left to read its outcome
    if not future.cancelled():
        future.exception()


class SharedFetch(Generic[T]):
    """
    One in-flight fetch with reference-counted waiters.

    Each waiter brings its own cancel event. Setting it, or cancelling the
    waiting task, releases that waiter alone with QueryCancelledError (or
    CancelledError); the fetch keeps running for the others. The fetch
    itself is cancelled only when its last waiter leaves, and that waiter
    returns once the fetch has unwound.
    """

    def __init__(self, fetch: Awaitable[T]):
        self.future: asyncio.Future = asyncio.ensure_future(fetch)
        self.future.add_done_callback(_consume)
        self._waiters = 0
        self._abandoned = False

    @property
    def waiters(self) -> int:
        return self._waiters

    @property
    def joinable(self) -> bool:
        """Still running and not abandoned."""
        return not self.future.done() and not self._abandoned

    async def join(self, cancel_event: asyncio.Event | None = None) -> T:
        """Wait for the shared result, or until `cancel_event` is set."""
        self._waiters += 1
        try:
            if cancel_event is None:
                await asyncio.wait({self.future})
                return self.future.result()

            cancelled = asyncio.ensure_future(cancel_event.wait())
            try:
                done, _ = await asyncio.wait(
                    {self.future, cancelled}, return_when=asyncio.FIRST_COMPLETED
                )
            finally:
                cancelled.cancel()
            if self.future in done:
                return self.future.result()
            raise QueryCancelledError("Query cancelled")
        finally:
            self._waiters -= 1
            if self._waiters == 0 and not self.future.done():
                self._abandoned = True
                self.future.cancel()
                await asyncio.wait({self.future})
