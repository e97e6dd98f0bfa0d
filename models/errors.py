"""
Error taxonomy for a single thumbnail resolution.

Every step of the pipeline raises one of these and nothing is recovered
locally. The router turns them into HTTP responses using status_code, so
"not found" and "internal error" stay distinguishable at the boundary.
"""


class ThumbError(Exception):
    """Base class. Anything unclassified is a server-side failure."""

    status_code = 500


class InvalidPath(ThumbError):
    """Request path is empty or points into the thumbnail namespace."""

    status_code = 400


class NotFound(ThumbError):
    """The requested object does not exist in the store."""

    status_code = 404


class StoreFault(ThumbError):
    """Store error other than not-found: network, auth, quota, missing bucket."""

    status_code = 502


class DecodeFault(ThumbError):
    """Origin bytes are not a supported image."""

    status_code = 422


class EncodeFault(ThumbError):
    """Encoder rejected the resized image. Usually a configuration problem."""

    status_code = 500
