"""
Pillow-backed codec: decode originals, encode thumbnails as WebP.

Decoding is restricted to the formats the service accepts as originals
(JPEG, PNG, GIF, BMP). Pillow opens lazily, so decode() calls load() to
force the full decode here rather than somewhere further down the pipeline.
"""

import io

from PIL import Image, UnidentifiedImageError

from models.errors import DecodeFault, EncodeFault
from models.thumbnail import THUMBNAIL_CONTENT_TYPE

SOURCE_FORMATS = ("JPEG", "PNG", "GIF", "BMP")


class PillowCodec:

    OUTPUT_FORMAT = "WEBP"
    CONTENT_TYPE = THUMBNAIL_CONTENT_TYPE

    def decode(self, data: bytes) -> Image.Image:
        """Decode raw bytes into a fully loaded image. Raises DecodeFault."""
        try:
            img = Image.open(io.BytesIO(data), formats=SOURCE_FORMATS)
            img.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError,
                SyntaxError, ValueError) as e:
            raise DecodeFault(f"Cannot decode image: {e}") from e
        return img

    def encode(self, img: Image.Image, quality: int) -> bytes:
        """Compress to WebP at the given quality. Raises EncodeFault."""
        buf = io.BytesIO()
        try:
            img.save(buf, format=self.OUTPUT_FORMAT, quality=quality)
        except (OSError, ValueError, KeyError) as e:
            raise EncodeFault(f"Cannot encode {self.OUTPUT_FORMAT}: {e}") from e
        return buf.getvalue()
