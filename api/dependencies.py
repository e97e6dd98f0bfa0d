"""
FastAPI dependency injection.

How this works:
- An endpoint declares `resolver: ThumbnailResolver = Depends(get_resolver)`
- FastAPI calls get_resolver() before the endpoint runs
- The resolver was built once in the lifespan and lives on app.state

Tests swap it out with app.dependency_overrides[get_resolver], so endpoints
never know whether they are talking to S3 or an in-memory store.
"""

from fastapi import Request

from resolver.resolver import ThumbnailResolver


async def get_resolver(request: Request) -> ThumbnailResolver:
    """Returns the resolver stored on the app during startup."""
    return request.app.state.resolver
