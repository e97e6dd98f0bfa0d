"""
Background persister — supervised respond-then-persist writes.

Used when PERSIST_POLICY=background. The resolver hands over the encoded
thumbnail and returns to the client straight away; the put runs as an
asyncio task owned by this object, not by the request:

    request task ──schedule()──► BackgroundPersister
         │                          │  task: run_in_executor(store.put)
         ▼                          ▼
     response                 done callback → counters + log

- Tasks are kept in a set so they are never garbage-collected mid-flight
  and are not cancelled when the request that produced them is.
- Until the put finishes the bytes stay in `_pending`, so a request that
  arrives in between is served from memory instead of regenerating.
- A failed put is logged and counted; the thumbnail will simply be
  generated again on a later miss.
- drain() is called on shutdown so accepted writes are not lost.
"""

import asyncio
import logging
from concurrent.futures import Executor
from dataclasses import asdict, dataclass

from storage.base import AbstractObjectStore

logger = logging.getLogger(__name__)


@dataclass
class PersistStats:
    scheduled: int = 0
    persisted: int = 0
    failed: int = 0


class BackgroundPersister:

    def __init__(self, store: AbstractObjectStore, executor: Executor | None = None):
        self._store = store
        self._executor = executor
        self._tasks: set[asyncio.Task] = set()
        self._pending: dict[str, bytes] = {}
        self._stats = PersistStats()

    def schedule(self, key: str, data: bytes, content_type: str) -> asyncio.Task:
        """Start writing data at key in the background. Returns the supervising task."""
        self._pending[key] = data
        self._stats.scheduled += 1
        task = asyncio.get_running_loop().create_task(
            self._write(key, data, content_type), name=f"persist:{key}"
        )
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._on_done(key, data, t))
        return task

    def peek(self, key: str) -> bytes | None:
        """Bytes accepted for key whose write has not finished yet."""
        return self._pending.get(key)

    def stats(self) -> dict:
        return {**asdict(self._stats), "pending": len(self._tasks)}

    async def drain(self) -> None:
        """Wait for every scheduled write to finish (successfully or not)."""
        if not self._tasks:
            return
        logger.info(f"Draining {len(self._tasks)} pending thumbnail writes...")
        await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _write(self, key: str, data: bytes, content_type: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(self._executor, self._store.put, key, data, content_type)

    def _on_done(self, key: str, data: bytes, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if self._pending.get(key) is data:
            del self._pending[key]

        if task.cancelled():
            self._stats.failed += 1
            logger.warning(f"Background write for {key} was cancelled")
            return
        exc = task.exception()
        if exc is not None:
            self._stats.failed += 1
            logger.error(f"Background write for {key} failed: {exc}")
            return
        self._stats.persisted += 1
        logger.debug(f"Background write for {key} persisted ({len(data)} bytes)")
