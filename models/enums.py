"""
Shared enumerations used across the entire project.

Using Python enums (inheriting from str) means:
- They serialize to JSON automatically ("sync", not "PersistPolicy.SYNC")
- pydantic-settings parses them straight from environment variables
- Typos become immediate errors instead of silent bugs
"""

import enum


class PersistPolicy(str, enum.Enum):
    SYNC = "sync"              # persist-then-respond: put must succeed before the response
    BACKGROUND = "background"  # respond-then-persist: put runs in a supervised task


class StoreBackend(str, enum.Enum):
    S3 = "s3"                  # S3 / MinIO via boto3
    MEMORY = "memory"          # process-local dict, for development and tests


class CacheStatus(str, enum.Enum):
    HIT = "HIT"                # thumbnail read from the store
    MISS = "MISS"              # this request generated the thumbnail
    SHARED = "SHARED"          # joined another request's in-flight generation
    PENDING = "PENDING"        # generated earlier, background write not finished yet
