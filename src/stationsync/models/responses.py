"""Response models for the HTTP surface.

Field names are snake_case in Python and camelCase on the wire
(``server_time`` -> ``serverTime``).
"""

from __future__ import annotations

from typing import Any

from stationsync.models._base import StationSyncModel

StoreSnapshot = dict[str, list[dict[str, Any]]]


class SyncResponse(StationSyncModel):
    success: bool = True
    message: str
    stations: StoreSnapshot
    server_time: str


class StationsResponse(StationSyncModel):
    success: bool = True
    stations: StoreSnapshot
    count: int
    last_update: str


class StationResponse(StationSyncModel):
    success: bool = True
    station_name: str
    records: list[dict[str, Any]]


class MessageResponse(StationSyncModel):
    """Plain ``{success, message}`` reply (delete, not found, failures)."""

    success: bool
    message: str


class InvalidPayloadResponse(MessageResponse):
    success: bool = False
    errors: list[dict[str, Any]]


class HealthResponse(StationSyncModel):
    status: str = "healthy"
    uptime: float
    memory: dict[str, int | None]
    timestamp: str
