"""Custom exception hierarchy for stationsync."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class StationSyncError(Exception):
    """Base exception for all stationsync errors."""


class StationSyncConfigError(StationSyncError):
    """Invalid or missing configuration."""


class PersistenceError(StationSyncError):
    """Read, write or parse failure on the durable data file."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        self.path = path
        super().__init__(message)


class InvalidInputError(StationSyncError):
    """Malformed sync payload.

    Raised before any mutation so a rejected batch never leaves the store
    partially updated. ``errors`` carries the per-location details reported
    by the validation layer.
    """

    def __init__(self, message: str, *, errors: list[dict[str, Any]] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)


class StationSyncTransportError(StationSyncError):
    """HTTP-level failure seen by the client (network, bad status, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class StationSyncApiError(StationSyncError):
    """Server answered with ``success: false``."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)
