"""Aggregate statistics over the store."""

from __future__ import annotations

from typing import Any

from stationsync.models._base import StationSyncModel


class StationStats(StationSyncModel):
    """Per-station summary.

    ``last_update`` is the ``savedAt`` of the newest record, or ``None``
    for an empty history.
    """

    name: str
    record_count: int
    last_update: Any = None


class StoreStats(StationSyncModel):
    total_stations: int
    total_records: int
    stations: list[StationStats]
