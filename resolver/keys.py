"""
Cache-key derivation.

Originals live at their natural path, thumbnails at <prefix>/<path> in the
same bucket. The key is a plain concatenation, so it is injective as long
as the prefix is fixed and no request path can itself start with it.
validate_request_path() enforces the second half of that.
"""

from models.errors import InvalidPath


def normalize_prefix(prefix: str) -> str:
    """'thumbs', '/thumbs' and 'thumbs/' all become 'thumbs/'."""
    stripped = prefix.strip().strip("/")
    if not stripped:
        raise ValueError("Thumbnail path prefix must be a non-empty path segment")
    return f"{stripped}/"


def validate_request_path(request_path: str, prefix: str) -> str:
    """
    Turn a URL path into an object key, or raise InvalidPath.

    Only the leading slash is removed. Everything else is kept verbatim so
    that two different request paths never collapse into the same key.
    """
    key = request_path[1:] if request_path.startswith("/") else request_path
    if not key:
        raise InvalidPath("Empty image path")
    if key.startswith(prefix):
        raise InvalidPath(f"Path '{key}' is inside the thumbnail namespace '{prefix}'")
    return key


def thumbnail_key(request_path: str, prefix: str) -> str:
    return prefix + request_path
