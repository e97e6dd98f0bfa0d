"""
FastAPI application factory.

This file:
1. Creates the FastAPI app
2. Runs startup logic (build the store, check the bucket, build the resolver)
3. Registers the routers (health first, then the catch-all thumbnail route)
4. Runs shutdown logic (flush background writes, stop the worker pool)

To run:  uvicorn api.main:app --host 0.0.0.0 --port 8000
    or:  python -m api.main        (uses LISTEN_HOST / LISTEN_PORT)
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config.settings import Settings
from api.routers import health, thumbnails
from resolver.context import build_context
from resolver.resolver import ThumbnailResolver

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logging.getLogger("botocore").setLevel(logging.WARNING)


def make_lifespan(settings: Settings):

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup:
        - Builds the ThumbContext (store client + worker pool) from settings
        - Verifies the bucket exists, so a misconfigured deployment fails
          at boot instead of on the first request

        Shutdown:
        - Waits for background thumbnail writes, stops the worker pool
        """
        # ── Startup ─────────────────────────────────────────────
        ctx = build_context(settings)
        if settings.S3_CHECK_BUCKET:
            ctx.store.check()
        app.state.resolver = ThumbnailResolver(ctx)
        logger.info(
            f"Thumbnail service ready — backend: {ctx.store.backend_name}, "
            f"size: {ctx.spec.width}x{ctx.spec.height}, quality: {ctx.spec.quality}, "
            f"prefix: {ctx.prefix}, persist: {ctx.persist_policy.value}"
        )

        yield

        # ── Shutdown ────────────────────────────────────────────
        await app.state.resolver.aclose()
        logger.info("Thumbnail service shut down")

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or Settings()
    configure_logging(settings)
    app = FastAPI(
        title="Thumbnail Service",
        description="Serves resized WebP thumbnails, generated on first request and cached in an object store",
        version="1.0.0",
        lifespan=make_lifespan(settings),
    )

    # Order matters: the thumbnail route matches every path
    app.include_router(health.router)
    app.include_router(thumbnails.router)

    return app


# This is what uvicorn imports: `uvicorn api.main:app`
app = create_app()


def main() -> None:
    settings = Settings()
    uvicorn.run(app, host=settings.LISTEN_HOST, port=settings.LISTEN_PORT)


if __name__ == "__main__":
    main()
