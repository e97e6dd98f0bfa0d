"""
Centralized configuration using pydantic-settings.

How it works:
- Reads environment variables automatically (e.g., THUMB_WIDTH env var → Settings.THUMB_WIDTH)
- Falls back to defaults defined here if env vars are not set
- Can also read from a .env file in the project root

Settings are frozen: they are read once at startup and turned into a
ThumbContext (resolver/context.py). Nothing mutates them afterwards.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from models.enums import PersistPolicy, StoreBackend
from models.thumbnail import ThumbnailSpec
from resolver.keys import normalize_prefix


class Settings(BaseSettings):
    # ── HTTP ────────────────────────────────────────────────────
    LISTEN_HOST: str = "0.0.0.0"
    LISTEN_PORT: int = 8000

    # ── Thumbnail ───────────────────────────────────────────────
    THUMB_WIDTH: int = Field(default=128, gt=0)
    THUMB_HEIGHT: int = Field(default=128, gt=0)
    THUMB_QUALITY: int = Field(default=80, ge=0, le=100)
    THUMB_PATH_PREFIX: str = "thumbs/"

    # ── Object store ────────────────────────────────────────────
    STORE_BACKEND: StoreBackend = StoreBackend.S3
    S3_BUCKET: str = "images"
    S3_ENDPOINT_URL: str | None = None   # e.g. http://minio:9000; None → AWS
    S3_ACCESS_KEY: str | None = None
    S3_SECRET_KEY: str | None = None
    S3_REGION: str = "us-east-1"
    S3_USE_SSL: bool = True
    S3_CHECK_BUCKET: bool = True         # fail fast at startup if the bucket is missing

    # ── Request pipeline ────────────────────────────────────────
    WORKER_POOL_SIZE: int = Field(default=8, gt=0)  # threads for store + codec calls
    PERSIST_POLICY: PersistPolicy = PersistPolicy.SYNC
    COALESCE_REQUESTS: bool = True

    # ── App ─────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    @field_validator("THUMB_PATH_PREFIX")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        return normalize_prefix(value)

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def thumbnail_spec(self) -> ThumbnailSpec:
        return ThumbnailSpec(
            width=self.THUMB_WIDTH,
            height=self.THUMB_HEIGHT,
            quality=self.THUMB_QUALITY,
        )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "frozen": True}
