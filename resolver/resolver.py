"""
Thumbnail resolver — the request pipeline.

One call to resolve() walks this state machine:

    CHECK_CACHE ──present──► HIT ─────────────────────────────► return stored bytes
         │
       absent
         ▼
    FETCH_ORIGIN ─► DECODE ─► RESIZE ─► ENCODE ─► STORE ─► return new bytes
         │            │                   │          │
     NotFound /   DecodeFault        EncodeFault  StoreFault (sync policy only)
     StoreFault

Every blocking step (store calls, codec, resize) runs in the context's
thread pool; the awaits between steps are where a cancelled request stops.
There are no retries and no fallbacks: the first failure propagates as a
ThumbError and the router turns it into an HTTP status.

Steps FETCH_ORIGIN..STORE run under SingleFlight, keyed by thumbnail key,
so concurrent misses for the same path share one generation.

STORE ordering is explicit (ThumbContext.persist_policy):
- SYNC        put first, then respond; a failed put fails the request
- BACKGROUND  respond first; BackgroundPersister owns the put
"""

import asyncio
import logging
import time
from functools import partial

from models.enums import CacheStatus, PersistPolicy
from models.errors import NotFound
from models.thumbnail import Thumbnail
from imaging.resize import resize
from resolver.context import ThumbContext
from resolver.keys import thumbnail_key, validate_request_path
from resolver.persist import BackgroundPersister
from resolver.singleflight import SingleFlight

logger = logging.getLogger(__name__)


class ThumbnailResolver:

    def __init__(self, ctx: ThumbContext):
        self._ctx = ctx
        self._inflight: SingleFlight[bytes] = SingleFlight()
        self.persister = BackgroundPersister(ctx.store, ctx.executor)

    @property
    def context(self) -> ThumbContext:
        return self._ctx

    @property
    def in_flight(self) -> int:
        """Number of thumbnail keys with a generation currently in progress."""
        return len(self._inflight)

    async def resolve(self, request_path: str) -> Thumbnail:
        """
        Return the thumbnail for the original stored at request_path.

        Raises:
            InvalidPath, NotFound, StoreFault, DecodeFault, EncodeFault
        """
        origin_key = validate_request_path(request_path, self._ctx.prefix)
        thumb_key = thumbnail_key(origin_key, self._ctx.prefix)

        # ── CHECK_CACHE ─────────────────────────────────────────
        pending = self.persister.peek(thumb_key)
        if pending is not None:
            return self._thumbnail(pending, CacheStatus.PENDING)

        if await self._call(self._ctx.store.exists, thumb_key):
            # ── HIT ─────────────────────────────────────────────
            try:
                data = await self._call(self._ctx.store.get, thumb_key)
            except NotFound:
                logger.warning(f"{thumb_key} vanished between HEAD and GET, regenerating")
            else:
                return self._thumbnail(data, CacheStatus.HIT)

        # ── MISS ────────────────────────────────────────────────
        generate = partial(self._generate, origin_key, thumb_key)
        if not self._ctx.coalesce:
            return self._thumbnail(await generate(), CacheStatus.MISS)

        data, shared = await self._inflight.do(thumb_key, generate)
        return self._thumbnail(data, CacheStatus.SHARED if shared else CacheStatus.MISS)

    async def _generate(self, origin_key: str, thumb_key: str) -> bytes:
        spec = self._ctx.spec
        codec = self._ctx.codec
        start = time.monotonic()

        source = await self._call(self._ctx.store.get, origin_key)
        img = await self._call(codec.decode, source)
        original_size = img.size
        img = await self._call(resize, img, spec.width, spec.height)
        data = await self._call(codec.encode, img, spec.quality)

        if self._ctx.persist_policy == PersistPolicy.BACKGROUND:
            self.persister.schedule(thumb_key, data, codec.CONTENT_TYPE)
        else:
            await self._call(self._ctx.store.put, thumb_key, data, codec.CONTENT_TYPE)

        elapsed = time.monotonic() - start
        logger.info(
            f"Generated {thumb_key} {original_size[0]}x{original_size[1]} → "
            f"{spec.width}x{spec.height} ({len(data)} bytes) in {elapsed:.3f}s"
        )
        return data

    async def _call(self, fn, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._ctx.executor, fn, *args)

    def _thumbnail(self, data: bytes, status: CacheStatus) -> Thumbnail:
        return Thumbnail(data=data, content_type=self._ctx.codec.CONTENT_TYPE, cache_status=status)

    async def aclose(self) -> None:
        """Flush background writes and stop the worker pool."""
        await self.persister.drain()
        if self._ctx.executor is not None:
            self._ctx.executor.shutdown(wait=True)
