"""
Value objects that flow through the resolver.

ThumbnailSpec is the process-wide target (size + quality), built once from
Settings. Thumbnail is what one resolution hands back to the router.
"""

from dataclasses import dataclass

from models.enums import CacheStatus

THUMBNAIL_CONTENT_TYPE = "image/webp"


@dataclass(frozen=True)
class ThumbnailSpec:
    width: int
    height: int
    quality: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Thumbnail dimensions must be positive, got {self.width}x{self.height}"
            )
        if not 0 <= self.quality <= 100:
            raise ValueError(f"Thumbnail quality must be within 0-100, got {self.quality}")


@dataclass(frozen=True)
class Thumbnail:
    data: bytes
    content_type: str = THUMBNAIL_CONTENT_TYPE
    cache_status: CacheStatus = CacheStatus.MISS
