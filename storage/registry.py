"""
Store registry — builds the configured object store.

Same idea as a factory lookup: STORE_BACKEND picks the class, the class
knows how to build itself from Settings.
"""

from config.settings import Settings
from models.enums import StoreBackend
from storage.base import AbstractObjectStore
from storage.memory import InMemoryObjectStore
from storage.s3 import S3ObjectStore


def create_store(settings: Settings) -> AbstractObjectStore:
    """Build the store named by settings.STORE_BACKEND."""
    if settings.STORE_BACKEND == StoreBackend.S3:
        return S3ObjectStore.from_settings(settings)
    if settings.STORE_BACKEND == StoreBackend.MEMORY:
        return InMemoryObjectStore()
    raise ValueError(f"Unknown store backend: '{settings.STORE_BACKEND}'")
