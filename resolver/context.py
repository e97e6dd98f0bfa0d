"""
ThumbContext — everything a resolver needs, built once at startup.

Replaces module-level config/client singletons: the FastAPI lifespan calls
build_context(settings), keeps the result on app.state, and each request
reaches it through a dependency. Tests build their own context around an
in-memory store.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from config.settings import Settings
from imaging.codec import PillowCodec
from models.enums import PersistPolicy
from models.thumbnail import ThumbnailSpec
from resolver.keys import normalize_prefix
from storage.base import AbstractObjectStore
from storage.registry import create_store


@dataclass(frozen=True)
class ThumbContext:
    store: AbstractObjectStore
    spec: ThumbnailSpec
    prefix: str
    persist_policy: PersistPolicy = PersistPolicy.SYNC
    coalesce: bool = True
    codec: PillowCodec = field(default_factory=PillowCodec)
    # None → the event loop's default executor
    executor: ThreadPoolExecutor | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "prefix", normalize_prefix(self.prefix))


def build_context(
    settings: Settings, store: AbstractObjectStore | None = None
) -> ThumbContext:
    """Create the store (unless given) and the worker pool from settings."""
    return ThumbContext(
        store=store if store is not None else create_store(settings),
        spec=settings.thumbnail_spec,
        prefix=settings.THUMB_PATH_PREFIX,
        persist_policy=settings.PERSIST_POLICY,
        coalesce=settings.COALESCE_REQUESTS,
        executor=ThreadPoolExecutor(
            max_workers=settings.WORKER_POOL_SIZE,
            thread_name_prefix="thumb-worker",
        ),
    )
