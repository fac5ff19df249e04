"""Deterministic batch merge.

This is the only routine allowed to fold an incoming batch into station
histories. It never mutates its inputs: callers swap the returned mapping in
as the new state.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Any

from stationsync._constants import MAX_RECORDS_PER_STATION, SAVED_AT_KEY
from stationsync.ingestion.normalize import saved_at_sort_key

Record = dict[str, Any]


def _merge_history(existing: Sequence[Record], incoming: Sequence[Mapping[str, Any]], max_records: int) -> list[Record]:
    """Append unseen records, order newest first, keep the newest ``max_records``."""
    history: list[Record] = list(existing)
    for record in incoming:
        saved_at = record.get(SAVED_AT_KEY)
        # Linear scan is fine for histories capped at a few dozen entries.
        if any(known.get(SAVED_AT_KEY) == saved_at for known in history):
            continue
        history.append(copy.deepcopy(dict(record)))

    # sorted() is stable with reverse=True: equal timestamps keep insertion order.
    history = sorted(history, key=saved_at_sort_key, reverse=True)
    return history[:max_records]


def merge_batch(
    current: Mapping[str, Sequence[Record]],
    batch: Mapping[str, Sequence[Mapping[str, Any]]],
    *,
    max_records: int = MAX_RECORDS_PER_STATION,
) -> dict[str, list[Record]]:
    """Merge ``batch`` into ``current`` and return the full next state.

    For every station in the batch: records whose ``savedAt`` already exists
    in the station history are skipped, the history is re-sorted descending by
    ``savedAt`` and truncated to ``max_records``. Stations not named in the
    batch are carried over as-is. Submitting the same batch twice yields the
    same state as submitting it once.
    """
    merged: dict[str, list[Record]] = {name: list(records) for name, records in current.items()}
    for name, records in batch.items():
        merged[name] = _merge_history(merged.get(name, []), records, max_records)
    return merged
