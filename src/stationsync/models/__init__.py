"""Data models for stationsync payloads."""

from stationsync.models._base import StationSyncModel
from stationsync.models.record import StationRecord
from stationsync.models.responses import (
    HealthResponse,
    InvalidPayloadResponse,
    MessageResponse,
    StationResponse,
    StationsResponse,
    StoreSnapshot,
    SyncResponse,
)
from stationsync.models.stats import StationStats, StoreStats
from stationsync.models.sync import SyncRequest

__all__ = [
    "HealthResponse",
    "InvalidPayloadResponse",
    "MessageResponse",
    "StationRecord",
    "StationResponse",
    "StationStats",
    "StationSyncModel",
    "StationsResponse",
    "StoreStats",
    "StoreSnapshot",
    "SyncRequest",
    "SyncResponse",
]
