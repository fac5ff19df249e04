"""Server configuration for stationsync."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from stationsync._constants import DEFAULT_DATA_FILE, DEFAULT_HOST, DEFAULT_PORT, MAX_RECORDS_PER_STATION
from stationsync.exceptions import StationSyncConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(env_key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise StationSyncConfigError(f"{env_key} must be an integer, got {value!r}") from exc


def _split_origins(value: str) -> tuple[str, ...]:
    origins = tuple(part.strip() for part in value.split(",") if part.strip())
    return origins or ("*",)


@dataclasses.dataclass(frozen=True)
class ServerConfig:
    """Server configuration.

    Parameters
    ----------
    host : str
        Interface to bind. Defaults to all interfaces so devices on the
        local network can reach the server.
    port : int
        TCP port to listen on.
    data_file : Path
        JSON file holding the persisted store. Its parent directory is
        created on first save.
    max_records : int
        Per-station history cap. Older records are dropped on every sync.
    cors_enabled : bool
        Attach CORS headers to every route.
    cors_origins : tuple[str, ...]
        Allowed origins; ``("*",)`` allows any origin.
    atomic_writes : bool
        Write the data file through a temp file and ``os.replace``. When
        disabled the file is rewritten in place.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    data_file: Path = Path(DEFAULT_DATA_FILE)
    max_records: int = MAX_RECORDS_PER_STATION
    cors_enabled: bool = True
    cors_origins: tuple[str, ...] = ("*",)
    atomic_writes: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.data_file, Path):
            object.__setattr__(self, "data_file", Path(self.data_file))
        if self.max_records < 1:
            raise StationSyncConfigError(f"max_records must be >= 1, got {self.max_records}")
        if not 0 <= self.port <= 65535:
            raise StationSyncConfigError(f"port must be between 0 and 65535, got {self.port}")

    @classmethod
    def from_env(cls, **overrides: Any) -> ServerConfig:
        """Create configuration from environment variables.

        Reads the optional ``STATION_SYNC_*`` variables. Explicit keyword
        arguments override environment values; ``None`` overrides are
        ignored so CLI flags that were not given fall through to the env.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ServerConfig
            Populated configuration.
        """
        env = os.environ
        overrides = {key: value for key, value in overrides.items() if value is not None}

        config_kwargs: dict[str, Any] = {}

        host_env = env.get("STATION_SYNC_HOST")
        if host_env is not None:
            config_kwargs["host"] = host_env

        port_env = env.get("STATION_SYNC_PORT")
        if port_env is not None and "port" not in overrides:
            config_kwargs["port"] = _env_int("STATION_SYNC_PORT", port_env)

        data_file_env = env.get("STATION_SYNC_DATA_FILE")
        if data_file_env is not None:
            config_kwargs["data_file"] = Path(data_file_env)

        max_records_env = env.get("STATION_SYNC_MAX_RECORDS")
        if max_records_env is not None and "max_records" not in overrides:
            config_kwargs["max_records"] = _env_int("STATION_SYNC_MAX_RECORDS", max_records_env)

        origins_env = env.get("STATION_SYNC_CORS_ORIGINS")
        if origins_env is not None and "cors_origins" not in overrides:
            config_kwargs["cors_origins"] = _split_origins(origins_env)

        if "cors_enabled" not in overrides:
            config_kwargs["cors_enabled"] = _env_bool(env.get("STATION_SYNC_CORS_ENABLED"), True)

        if "atomic_writes" not in overrides:
            config_kwargs["atomic_writes"] = _env_bool(env.get("STATION_SYNC_ATOMIC_WRITES"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
