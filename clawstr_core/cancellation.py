"""Bounded execution of transport calls.

A query is abandoned when the first of two things happens: its timer
expires or an external cancellation event is set (for example a feed
being closed by its consumer). Either way the underlying task is
cancelled so the relay socket is released.
"""

import asyncio
from typing import Awaitable, TypeVar

from .errors import QueryCancelledError, QueryTimeoutError
from .logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


async def _cancel_and_wait(task: asyncio.Future) -> None:
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
    except Exception as e:
        # Already abandoned; the failure has nobody to report to
        logger.debug("Abandoned query finished with error: %s", e)


async def run_cancellable(
    awaitable: Awaitable[T],
    *,
    timeout: float,
    cancel_event: asyncio.Event | None = None,
) -> T:
    """
    Await `awaitable` under a timeout and an optional cancellation event.

    Raises:
        QueryTimeoutError: the timer fired first.
        QueryCancelledError: `cancel_event` was set first.
    """
    task = asyncio.ensure_future(awaitable)
    waiters: set[asyncio.Future] = {task}
    cancel_waiter: asyncio.Future | None = None
    if cancel_event is not None:
        cancel_waiter = asyncio.ensure_future(cancel_event.wait())
        waiters.add(cancel_waiter)

    try:
        done, _ = await asyncio.wait(
            waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
        )
    except asyncio.CancelledError:
        await _cancel_and_wait(task)
        raise
    finally:
        if cancel_waiter is not None:
            await _cancel_and_wait(cancel_waiter)

    if task in done:
        return task.result()

    await _cancel_and_wait(task)

    if cancel_event is not None and cancel_event.is_set():
        raise QueryCancelledError("Query cancelled")

    logger.warning("Query timed out after %ss", timeout)
    raise QueryTimeoutError(timeout)
