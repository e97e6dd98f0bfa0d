"""
In-memory object store.

A dict guarded by a lock, because the resolver calls stores from several
worker threads at once. Used for local development (STORE_BACKEND=memory)
and as the store behind the test-suite. Content types are kept alongside
the bytes so tests can check what a real bucket would have recorded.
"""

import threading

from models.errors import NotFound
from storage.base import AbstractObjectStore


class InMemoryObjectStore(AbstractObjectStore):

    def __init__(self, objects: dict[str, bytes] | None = None):
        self._lock = threading.Lock()
        self._objects: dict[str, tuple[bytes, str]] = {}
        for key, data in (objects or {}).items():
            self._objects[key] = (data, "application/octet-stream")

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._objects

    def get(self, key: str) -> bytes:
        with self._lock:
            entry = self._objects.get(key)
        if entry is None:
            raise NotFound(f"No such object: {key}")
        return entry[0]

    def put(self, key: str, data: bytes, content_type: str) -> None:
        with self._lock:
            self._objects[key] = (bytes(data), content_type)

    def content_type(self, key: str) -> str:
        with self._lock:
            entry = self._objects.get(key)
        if entry is None:
            raise NotFound(f"No such object: {key}")
        return entry[1]

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._objects)

    def check(self) -> None:
        return None

    @property
    def backend_name(self) -> str:
        return "memory"
