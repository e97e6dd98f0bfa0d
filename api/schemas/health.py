"""Pydantic schema for GET /health."""

from pydantic import BaseModel

from models.enums import PersistPolicy


class PersisterStats(BaseModel):
    scheduled: int
    persisted: int
    failed: int
    pending: int


class HealthResponse(BaseModel):
    status: str
    store: str
    store_backend: str
    persist_policy: PersistPolicy
    in_flight: int        # thumbnail generations currently shared by requests
    persister: PersisterStats
