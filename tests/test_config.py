from __future__ import annotations

from pathlib import Path

import pytest

from stationsync.config import ServerConfig
from stationsync.exceptions import StationSyncConfigError

_ENV_KEYS = (
    "STATION_SYNC_HOST",
    "STATION_SYNC_PORT",
    "STATION_SYNC_DATA_FILE",
    "STATION_SYNC_MAX_RECORDS",
    "STATION_SYNC_CORS_ORIGINS",
    "STATION_SYNC_CORS_ENABLED",
    "STATION_SYNC_ATOMIC_WRITES",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = ServerConfig.from_env()

    assert config.host == "0.0.0.0"
    assert config.port == 3000
    assert config.data_file == Path("data/stations.json")
    assert config.max_records == 50
    assert config.cors_enabled is True
    assert config.cors_origins == ("*",)
    assert config.atomic_writes is True


def test_reads_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STATION_SYNC_HOST", "127.0.0.1")
    monkeypatch.setenv("STATION_SYNC_PORT", "8080")
    monkeypatch.setenv("STATION_SYNC_DATA_FILE", "/var/lib/stations.json")
    monkeypatch.setenv("STATION_SYNC_MAX_RECORDS", "10")
    monkeypatch.setenv("STATION_SYNC_CORS_ORIGINS", "http://a.example, http://b.example,")
    monkeypatch.setenv("STATION_SYNC_CORS_ENABLED", "off")
    monkeypatch.setenv("STATION_SYNC_ATOMIC_WRITES", "no")

    config = ServerConfig.from_env()

    assert config.host == "127.0.0.1"
    assert config.port == 8080
    assert config.data_file == Path("/var/lib/stations.json")
    assert config.max_records == 10
    assert config.cors_origins == ("http://a.example", "http://b.example")
    assert config.cors_enabled is False
    assert config.atomic_writes is False


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STATION_SYNC_PORT", "8080")
    monkeypatch.setenv("STATION_SYNC_DATA_FILE", "/env/stations.json")

    config = ServerConfig.from_env(port=9000, data_file=Path("/cli/stations.json"))

    assert config.port == 9000
    assert config.data_file == Path("/cli/stations.json")


def test_none_overrides_fall_through_to_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STATION_SYNC_PORT", "8080")

    config = ServerConfig.from_env(port=None, host=None)

    assert config.port == 8080
    assert config.host == "0.0.0.0"


def test_unknown_bool_value_keeps_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STATION_SYNC_CORS_ENABLED", "maybe")

    assert ServerConfig.from_env().cors_enabled is True


def test_invalid_integer_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STATION_SYNC_PORT", "http")

    with pytest.raises(StationSyncConfigError, match="STATION_SYNC_PORT"):
        ServerConfig.from_env()


def test_max_records_must_be_positive() -> None:
    with pytest.raises(StationSyncConfigError):
        ServerConfig(max_records=0)


def test_port_range() -> None:
    with pytest.raises(StationSyncConfigError):
        ServerConfig(port=70000)


def test_string_data_file_is_coerced_to_path() -> None:
    config = ServerConfig(data_file="stations.json")  # type: ignore[arg-type]

    assert config.data_file == Path("stations.json")
