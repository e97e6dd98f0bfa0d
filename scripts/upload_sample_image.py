"""
Upload a generated sample image into the configured bucket.

Usage:
    python -m scripts.upload_sample_image                    # → samples/grid.jpg
    python -m scripts.upload_sample_image --key photos/a.jpg

Then request it through the service:
    curl -o thumb.webp http://localhost:8000/samples/grid.jpg
"""

import argparse
import io

from PIL import Image, ImageDraw

from config.settings import Settings
from storage.registry import create_store


def sample_jpeg(width: int = 800, height: int = 600) -> bytes:
    img = Image.new("RGB", (width, height), color=(41, 128, 185))
    draw = ImageDraw.Draw(img)

    # Grid pattern so the stretch is visible in the thumbnail
    for x in range(0, width, 40):
        draw.line([(x, 0), (x, height)], fill=(52, 152, 219), width=1)
    for y in range(0, height, 40):
        draw.line([(0, y), (width, y)], fill=(52, 152, 219), width=1)

    draw.rectangle(
        [width // 4, height // 4, width * 3 // 4, height * 3 // 4],
        fill=(231, 76, 60), outline=(192, 57, 43), width=3,
    )

    buf = io.BytesIO()
    img.save(buf, "JPEG", quality=85)
    return buf.getvalue()


def main():
    parser = argparse.ArgumentParser(description="Upload a sample original image")
    parser.add_argument("--key", default="samples/grid.jpg", help="Object key for the original")
    parser.add_argument("--width", type=int, default=800)
    parser.add_argument("--height", type=int, default=600)
    args = parser.parse_args()

    settings = Settings()
    store = create_store(settings)
    store.check()
    store.put(args.key, sample_jpeg(args.width, args.height), "image/jpeg")
    print(f"Uploaded {args.width}x{args.height} sample to {settings.S3_BUCKET}/{args.key}")


if __name__ == "__main__":
    main()
