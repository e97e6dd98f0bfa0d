"""
Fixed resize: stretch any source image to exactly (width, height).

No aspect-ratio preservation and no configurable filter. The colour mode is
normalised first (RGB, or RGBA when the source carries transparency) so the
same input always goes through the same resampling path.
"""

from PIL import Image

RESAMPLE = Image.Resampling.LANCZOS


def resize(img: Image.Image, width: int, height: int) -> Image.Image:
    if width <= 0 or height <= 0:
        raise ValueError(f"Target size must be positive, got {width}x{height}")

    has_alpha = "A" in img.getbands() or "transparency" in img.info
    mode = "RGBA" if has_alpha else "RGB"
    if img.mode != mode:
        img = img.convert(mode)

    return img.resize((width, height), resample=RESAMPLE)
