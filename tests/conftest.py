"""
Shared test fixtures.

These replace real infrastructure with lightweight in-memory alternatives:
- S3 bucket → InMemoryObjectStore (wrapped to count calls)
- Pillow codec → the real codec, wrapped to count calls
- HTTP server → httpx.AsyncClient with ASGI transport (no network)

The call counters are how tests observe the pipeline from outside:
"a cache hit must not fetch the origin" becomes
`store.calls["get"] == [thumb_key]`.
"""

import io
import threading
from collections import defaultdict

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from PIL import Image

from api.dependencies import get_resolver
from api.main import create_app
from config.settings import Settings
from imaging.codec import PillowCodec
from models.enums import PersistPolicy
from models.thumbnail import ThumbnailSpec
from resolver.context import ThumbContext
from resolver.resolver import ThumbnailResolver
from storage.memory import InMemoryObjectStore

PREFIX = "thumbs/"


def make_jpeg(width: int = 800, height: int = 600, color=(200, 30, 30)) -> bytes:
    """Encode a solid-colour JPEG of the given size."""
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color=color).save(buf, "JPEG", quality=90)
    return buf.getvalue()


def make_png(width: int, height: int, mode: str = "RGBA") -> bytes:
    buf = io.BytesIO()
    Image.new(mode, (width, height)).save(buf, "PNG")
    return buf.getvalue()


class CountingStore(InMemoryObjectStore):
    """In-memory store that records every key passed to exists/get/put."""

    def __init__(self, objects=None):
        super().__init__(objects)
        self.calls: dict[str, list[str]] = defaultdict(list)

    def exists(self, key):
        self.calls["exists"].append(key)
        return super().exists(key)

    def get(self, key):
        self.calls["get"].append(key)
        return super().get(key)

    def put(self, key, data, content_type):
        self.calls["put"].append(key)
        super().put(key, data, content_type)


class CountingCodec(PillowCodec):
    """Real Pillow codec that counts decode/encode calls."""

    def __init__(self):
        self.decodes = 0
        self.encodes = 0

    def decode(self, data):
        self.decodes += 1
        return super().decode(data)

    def encode(self, img, quality):
        self.encodes += 1
        return super().encode(img, quality)


class GatedStore(CountingStore):
    """
    CountingStore whose origin reads and/or writes block until released.

    Lets a test freeze the pipeline at FETCH_ORIGIN or STORE, look at the
    system from outside, then let it continue with gates["get"].set().
    """

    def __init__(self, objects=None, gated=("get",)):
        super().__init__(objects)
        self.gates = {op: threading.Event() for op in gated}

    def _wait(self, op):
        gate = self.gates.get(op)
        if gate is not None:
            assert gate.wait(timeout=5), f"{op} gate never released"

    def get(self, key):
        if not key.startswith(PREFIX):
            self._wait("get")
        return super().get(key)

    def put(self, key, data, content_type):
        self._wait("put")
        super().put(key, data, content_type)

    def release(self):
        for gate in self.gates.values():
            gate.set()


@pytest.fixture
def jpeg():
    """Factory for JPEG bytes: jpeg(width, height)."""
    return make_jpeg


@pytest.fixture
def png():
    """Factory for PNG bytes: png(width, height, mode)."""
    return make_png


@pytest.fixture
def store():
    """Bucket holding one valid 800x600 JPEG and one corrupt object."""
    return CountingStore({
        "photos/a.jpg": make_jpeg(800, 600),
        "photos/corrupt.bin": b"definitely not an image",
    })


@pytest.fixture
def gated_store():
    """Factory: gated_store(gated=("get",)) with the same objects as `store`."""
    created = []

    def _make(gated=("get",)):
        s = GatedStore({
            "photos/a.jpg": make_jpeg(800, 600),
            "photos/corrupt.bin": b"definitely not an image",
        }, gated=gated)
        created.append(s)
        return s

    yield _make
    # Never leave a worker thread blocked on a gate
    for s in created:
        s.release()


@pytest.fixture
def codec():
    return CountingCodec()


@pytest.fixture
def spec():
    return ThumbnailSpec(width=100, height=100, quality=80)


@pytest.fixture
def make_resolver(store, codec, spec):
    """Build a resolver around the shared store/codec with chosen policies."""

    def _make(persist_policy=PersistPolicy.SYNC, coalesce=True, **overrides):
        ctx = ThumbContext(
            store=overrides.pop("store", store),
            spec=overrides.pop("spec", spec),
            prefix=overrides.pop("prefix", PREFIX),
            persist_policy=persist_policy,
            coalesce=coalesce,
            codec=overrides.pop("codec", codec),
        )
        return ThumbnailResolver(ctx)

    return _make


@pytest.fixture
def resolver(make_resolver):
    return make_resolver()


@pytest_asyncio.fixture
async def client(resolver):
    """
    Create a test HTTP client that talks directly to the FastAPI app.

    dependency_overrides tells FastAPI: "instead of the resolver built in the
    lifespan, use this test one." ASGITransport does not run the lifespan,
    so no S3 client is ever created.
    """
    app = create_app(Settings(STORE_BACKEND="memory", S3_CHECK_BUCKET=False))

    async def override_get_resolver():
        return resolver

    app.dependency_overrides[get_resolver] = override_get_resolver

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
