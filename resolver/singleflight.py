"""
Single-flight: at most one in-flight computation per key.

Concurrent cache misses for the same thumbnail key all await the same task
instead of each fetching, decoding and encoding the original. Every caller
receives the same result or the same exception.

The map is only touched from the event loop thread, and there is no await
between the lookup and the insert, so no lock is needed.

Cancellation:
    Callers await the shared task through asyncio.shield(), so one request
    going away does not cancel work others are waiting on. When the LAST
    waiter is cancelled, nobody needs the result any more and the task is
    cancelled too.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _Call(Generic[T]):
    task: "asyncio.Future[T]"
    waiters: int = 0


class SingleFlight(Generic[T]):

    def __init__(self):
        self._calls: dict[str, _Call[T]] = {}

    def in_flight(self, key: str) -> bool:
        return key in self._calls

    def __len__(self) -> int:
        return len(self._calls)

    async def do(self, key: str, fn: Callable[[], Awaitable[T]]) -> tuple[T, bool]:
        """
        Run fn() for key unless a call is already in flight, then await it.

        Returns (result, shared). shared is True when this caller joined a
        call started by someone else.
        """
        call = self._calls.get(key)
        shared = call is not None
        if call is None:
            call = _Call(task=asyncio.ensure_future(fn()))
            self._calls[key] = call
            call.task.add_done_callback(lambda task: self._forget(key, call))
        else:
            logger.debug(f"Joining in-flight call for {key}")

        call.waiters += 1
        try:
            result = await asyncio.shield(call.task)
        except asyncio.CancelledError:
            if call.waiters == 1 and not call.task.done():
                logger.debug(f"Last waiter for {key} cancelled, cancelling call")
                if self._calls.get(key) is call:
                    del self._calls[key]
                call.task.cancel()
            raise
        finally:
            call.waiters -= 1
        return result, shared

    def _forget(self, key: str, call: _Call[T]) -> None:
        if self._calls.get(key) is call:
            del self._calls[key]
        # Retrieve the exception so an abandoned failure is not reported
        # as "never retrieved" by the event loop.
        if not call.task.cancelled() and call.task.exception() is not None:
            logger.debug(f"In-flight call for {key} failed: {call.task.exception()}")
