"""Normalization helpers.

Centralizes ``savedAt`` parsing so the merger and the validation layer agree
on what counts as a timestamp.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

from stationsync._constants import SAVED_AT_KEY

# Sort position for stored records whose savedAt cannot be parsed.
OLDEST = datetime.min.replace(tzinfo=UTC)


def parse_saved_at(value: Any) -> datetime | None:
    """Parse a record's ``savedAt`` into an aware UTC datetime.

    Strings are read as ISO-8601 (a trailing ``Z`` is accepted; naive values
    are taken as UTC). Numbers are epoch milliseconds. Returns ``None`` for
    anything else.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        try:
            parsed = datetime.fromtimestamp(value / 1000.0, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except (OverflowError, ValueError):
        # Offset pushes the instant outside the representable range.
        return None


def saved_at_sort_key(record: Any) -> datetime:
    """Chronological sort key for a stored record."""
    if not isinstance(record, dict):
        return OLDEST
    parsed = parse_saved_at(record.get(SAVED_AT_KEY))
    return parsed if parsed is not None else OLDEST


def iso_now() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a ``Z`` suffix."""
    return to_iso(datetime.now(UTC))


def to_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
