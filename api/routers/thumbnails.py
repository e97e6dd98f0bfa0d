"""
Thumbnail endpoint.

GET /{path} → thumbnail bytes for the original stored at {path}

The router is intentionally thin:
- Hand the path to the resolver
- Return the bytes with the thumbnail content type
- Turn a ThumbError into an explicit HTTP error

A failed resolution always produces a status code and a JSON body; the
client never gets an empty 200 or a dropped connection.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from api.dependencies import get_resolver
from models.errors import ThumbError
from resolver.resolver import ThumbnailResolver

logger = logging.getLogger(__name__)

router = APIRouter(tags=["thumbnails"])

CACHE_STATUS_HEADER = "X-Thumbnail-Cache"


@router.get(
    "/{request_path:path}",
    response_class=Response,
    responses={
        200: {"content": {"image/webp": {}}, "description": "The thumbnail"},
        400: {"description": "Path is empty or inside the thumbnail namespace"},
        404: {"description": "No original image at this path"},
        422: {"description": "Original is not a supported image"},
        502: {"description": "Object store failure"},
    },
)
async def get_thumbnail(
    request_path: str,
    resolver: ThumbnailResolver = Depends(get_resolver),
) -> Response:
    """Return the thumbnail for an original image, generating it on first request."""
    try:
        thumb = await resolver.resolve(request_path)
    except ThumbError as e:
        if e.status_code >= 500:
            logger.error(f"Resolving '{request_path}' failed: {e}")
        else:
            logger.info(f"Resolving '{request_path}' rejected ({e.status_code}): {e}")
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return Response(
        content=thumb.data,
        media_type=thumb.content_type,
        headers={CACHE_STATUS_HEADER: thumb.cache_status.value},
    )
