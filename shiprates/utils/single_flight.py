"""Single-flight execution of an async operation.

Collapses concurrent calls into one underlying execution: the first
caller starts the work, every caller that arrives while it is still
running awaits the same result (or the same exception). Once the work
finishes the slot is cleared, so the next call starts a fresh execution.

Example:
    flight = SingleFlight()

    async def fetch():
        return await client.get_token()

    # Ten concurrent callers, one fetch
    tokens = await asyncio.gather(*(flight.run(fetch) for _ in range(10)))
"""

import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SingleFlight(Generic[T]):
    """At most one in-flight execution; concurrent callers share its outcome.

    The shared execution runs in its own task, so cancelling one waiter
    does not cancel the work the other waiters depend on.
    """

    def __init__(self) -> None:
        self._task: asyncio.Task[T] | None = None

    @property
    def in_flight(self) -> bool:
        """True while an execution is running."""
        return self._task is not None

    async def run(self, fn: Callable[[], Awaitable[T]]) -> T:
        """Run ``fn`` unless an execution is already underway, then await it.

        Args:
            fn: Zero-argument coroutine function performing the work.

        Returns:
            The shared execution's result.

        Raises:
            Whatever the shared execution raised.
        """
        task = self._task
        if task is None:
            task = asyncio.ensure_future(self._execute(fn))
            task.add_done_callback(_consume_exception)
            self._task = task
        else:
            logger.debug("Joining in-flight execution")
        return await asyncio.shield(task)

    async def _execute(self, fn: Callable[[], Awaitable[T]]) -> T:
        try:
            return await fn()
        finally:
            self._task = None


def _consume_exception(task: asyncio.Task) -> None:
    # Waiters may all have been cancelled; mark the exception retrieved so
    # the event loop does not log it as unhandled.
    if not task.cancelled():
        task.exception()
