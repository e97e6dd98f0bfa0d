"""
Health check endpoint.

Checks that the object store (bucket) is reachable and reports the
pipeline's own counters: in-flight generations and background writes.
Registered before the catch-all thumbnail route, so /health always wins.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_resolver
from api.schemas.health import HealthResponse
from models.errors import StoreFault
from resolver.resolver import ThumbnailResolver

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    resolver: ThumbnailResolver = Depends(get_resolver),
) -> HealthResponse:
    """Check that the store is reachable."""
    ctx = resolver.context
    try:
        await asyncio.get_running_loop().run_in_executor(ctx.executor, ctx.store.check)
    except StoreFault as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    return HealthResponse(
        status="healthy",
        store="ok",
        store_backend=ctx.store.backend_name,
        persist_policy=ctx.persist_policy,
        in_flight=resolver.in_flight,
        persister=resolver.persister.stats(),
    )
