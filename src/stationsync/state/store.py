"""Process-wide station store.

This is the only component that owns station histories. Mutations (sync and
delete) run under a single lock together with the save that follows them, so
overlapping requests are applied one at a time.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from stationsync._constants import MAX_RECORDS_PER_STATION, SAVED_AT_KEY
from stationsync.exceptions import PersistenceError
from stationsync.models.stats import StationStats, StoreStats
from stationsync.state.merge import merge_batch
from stationsync.state.persistence import JsonFileStorage

_logger = logging.getLogger(__name__)


class StationStore:
    """Station name -> bounded record history, newest first.

    Lifecycle: construct at startup, :meth:`load`, serve, :meth:`flush` on
    shutdown. Readers get deep copies; the internal mapping is replaced, never
    edited in place, by :meth:`sync`.
    """

    def __init__(
        self,
        storage: JsonFileStorage | None = None,
        *,
        max_records: int = MAX_RECORDS_PER_STATION,
    ) -> None:
        self._storage = storage
        self._max_records = max_records
        self._stations: dict[str, list[dict[str, Any]]] = {}
        self._lock = asyncio.Lock()

    @property
    def max_records(self) -> int:
        return self._max_records

    def __len__(self) -> int:
        return len(self._stations)

    def __contains__(self, name: object) -> bool:
        return name in self._stations

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Replace the in-memory state with the persisted snapshot."""
        if self._storage is None:
            return
        self._stations = self._storage.load()

    async def flush(self) -> None:
        """Persist the current state."""
        async with self._lock:
            await self._persist()

    async def _persist(self) -> None:
        if self._storage is None:
            return
        snapshot = copy.deepcopy(self._stations)
        try:
            await asyncio.to_thread(self._storage.save, snapshot)
        except PersistenceError:
            # In-memory state stays authoritative; the next mutation retries the write.
            _logger.error("Failed to persist %d station(s)", len(snapshot), exc_info=True)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def sync(self, batch: Mapping[str, Sequence[Mapping[str, Any]]]) -> dict[str, list[dict[str, Any]]]:
        """Merge a validated batch, persist, and return the full store."""
        async with self._lock:
            self._stations = merge_batch(self._stations, batch, max_records=self._max_records)
            _logger.debug(
                "Merged %d station(s); store now holds %d station(s)",
                len(batch),
                len(self._stations),
            )
            await self._persist()
            return self.snapshot()

    async def delete(self, name: str) -> bool:
        """Remove a station. Returns ``False`` if it does not exist."""
        async with self._lock:
            if name not in self._stations:
                return False
            remaining = dict(self._stations)
            del remaining[name]
            self._stations = remaining
            _logger.info("Deleted station %r", name)
            await self._persist()
            return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def snapshot(self) -> dict[str, list[dict[str, Any]]]:
        return copy.deepcopy(self._stations)

    def get(self, name: str) -> list[dict[str, Any]] | None:
        records = self._stations.get(name)
        if records is None:
            return None
        return copy.deepcopy(records)

    def stats(self) -> StoreStats:
        stations = [
            StationStats(
                name=name,
                record_count=len(records),
                last_update=records[0].get(SAVED_AT_KEY) if records else None,
            )
            for name, records in self._stations.items()
        ]
        return StoreStats(
            total_stations=len(stations),
            total_records=sum(item.record_count for item in stations),
            stations=stations,
        )
