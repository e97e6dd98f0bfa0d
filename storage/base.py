"""
Abstract base class for object stores (Strategy pattern).

The resolver only talks to AbstractObjectStore: exists / get / put keyed by
a string path. S3ObjectStore and InMemoryObjectStore are the two
implementations; storage/registry.py picks one from settings.

Error contract every implementation must follow:
- exists() returns False for a missing key, never raises NotFound
- get() raises NotFound for a missing key
- any other failure is raised as StoreFault
All methods are blocking; the resolver runs them in its thread pool.
"""

from abc import ABC, abstractmethod


class AbstractObjectStore(ABC):

    @abstractmethod
    def exists(self, key: str) -> bool:
        """True if an object is stored at key."""
        ...

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Return the full object body at key."""
        ...

    @abstractmethod
    def put(self, key: str, data: bytes, content_type: str) -> None:
        """Write data at key with the given Content-Type. Last write wins."""
        ...

    @abstractmethod
    def check(self) -> None:
        """Raise StoreFault if the store is not usable (bucket missing, unreachable)."""
        ...

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Unique name matching StoreBackend (e.g., 's3', 'memory')."""
        ...
