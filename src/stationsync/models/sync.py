"""Sync request model."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from stationsync.models._base import StationSyncModel
from stationsync.models.record import StationRecord


class SyncRequest(StationSyncModel):
    """Body of ``POST /sync``.

    Parameters
    ----------
    stations : dict[str, list[StationRecord]]
        Batch of new records keyed by station name, in the order received.
    device_id : str or None
        Identifier of the submitting device. Only logged.
    timestamp : float or None
        Device clock at submission, epoch milliseconds. Only logged.
    """

    stations: dict[str, list[StationRecord]]
    device_id: str | None = None
    timestamp: float | None = Field(default=None, allow_inf_nan=False)

    @field_validator("stations")
    @classmethod
    def _non_empty_station_names(cls, value: dict[str, list[StationRecord]]) -> dict[str, list[StationRecord]]:
        for name in value:
            if not name.strip():
                raise ValueError("station names must be non-empty")
        return value

    def batch(self) -> dict[str, list[dict[str, Any]]]:
        """Plain-dict batch for the merger."""
        return {name: [record.to_dict() for record in records] for name, records in self.stations.items()}
