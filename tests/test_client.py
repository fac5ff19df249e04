"""StationSyncClient against an in-process server."""

from __future__ import annotations

from pathlib import Path

import pytest
from aiohttp.test_utils import TestServer

from stationsync.client import StationSyncClient
from stationsync.config import ServerConfig
from stationsync.exceptions import StationSyncApiError, StationSyncTransportError
from stationsync.server import create_app


def _server(tmp_path: Path) -> TestServer:
    return TestServer(create_app(ServerConfig(data_file=tmp_path / "stations.json")))


@pytest.mark.asyncio
async def test_sync_and_read_back(tmp_path: Path) -> None:
    record = {"savedAt": "2024-01-01T00:00:00Z", "level": 1.5}

    async with _server(tmp_path) as server:
        async with StationSyncClient(str(server.make_url("/")), device_id="tablet-9") as client:
            result = await client.sync({"محطة 1": [record]})
            stations = await client.get_stations()
            records = await client.get_station("محطة 1")
            stats = await client.get_stats()

    assert result.success is True
    assert result.stations == {"محطة 1": [record]}
    assert stations.count == 1
    assert records == [record]
    assert stats.total_records == 1
    assert stats.stations[0].last_update == record["savedAt"]


@pytest.mark.asyncio
async def test_unknown_station(tmp_path: Path) -> None:
    async with _server(tmp_path) as server:
        async with StationSyncClient(str(server.make_url("/"))) as client:
            assert await client.get_station("Z") is None
            assert await client.delete_station("Z") is False


@pytest.mark.asyncio
async def test_delete_station(tmp_path: Path) -> None:
    async with _server(tmp_path) as server:
        async with StationSyncClient(str(server.make_url("/"))) as client:
            await client.sync({"A": [{"savedAt": "2024-01-01T00:00:00Z"}]})
            assert await client.delete_station("A") is True
            assert (await client.get_stations()).count == 0


@pytest.mark.asyncio
async def test_invalid_batch_raises_api_error(tmp_path: Path) -> None:
    async with _server(tmp_path) as server:
        async with StationSyncClient(str(server.make_url("/"))) as client:
            with pytest.raises(StationSyncApiError) as excinfo:
                await client.sync({"A": [{"v": 1}]})

    assert excinfo.value.endpoint == "/sync"


@pytest.mark.asyncio
async def test_health(tmp_path: Path) -> None:
    async with _server(tmp_path) as server:
        async with StationSyncClient(str(server.make_url("/"))) as client:
            health = await client.health()

    assert health.status == "healthy"


@pytest.mark.asyncio
async def test_unexpected_status_raises_transport_error(tmp_path: Path) -> None:
    async with _server(tmp_path) as server:
        async with StationSyncClient(str(server.make_url("/"))) as client:
            with pytest.raises(StationSyncTransportError) as excinfo:
                await client._request("GET", "/no-such-route")  # noqa: SLF001

    assert excinfo.value.status_code == 404


@pytest.mark.asyncio
async def test_connection_failure_raises_transport_error() -> None:
    async with StationSyncClient("http://127.0.0.1:1") as client:
        with pytest.raises(StationSyncTransportError):
            await client.get_stats()


@pytest.mark.asyncio
async def test_client_must_be_started() -> None:
    client = StationSyncClient("http://127.0.0.1:1")

    with pytest.raises(StationSyncTransportError):
        await client.get_stations()
