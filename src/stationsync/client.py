"""Async client for a station-sync server.

Used by devices (and operator scripts) to push batches and read the merged
history back.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote

import aiohttp

from stationsync.exceptions import StationSyncApiError, StationSyncTransportError
from stationsync.models.responses import HealthResponse, StationResponse, StationsResponse, SyncResponse
from stationsync.models.stats import StoreStats

_logger = logging.getLogger(__name__)


def _now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)


class StationSyncClient:
    """Async client for the station-sync HTTP API.

    Usage::

        async with StationSyncClient("http://192.168.1.10:3000") as client:
            result = await client.sync({"P1": [{"savedAt": "2024-01-01T00:00:00Z", "level": 3}]})
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: aiohttp.ClientSession | None = None,
        device_id: str | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._external_session = session is not None
        self._http_session = session
        self._device_id = device_id

    async def __aenter__(self) -> StationSyncClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        if self._http_session is not None and not self._external_session:
            await self._http_session.close()
        self._http_session = None

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        payload: Mapping[str, Any] | None = None,
        accept_statuses: frozenset[int] = frozenset({200}),
    ) -> dict[str, Any]:
        if self._http_session is None:
            raise StationSyncTransportError("Client not started; use 'async with StationSyncClient(...)'")

        url = f"{self._base_url}{endpoint}"
        _logger.debug("%s %s", method, url)

        try:
            async with self._http_session.request(method, url, json=payload) as resp:
                text = await resp.text()
                status = resp.status
        except aiohttp.ClientError as exc:
            raise StationSyncTransportError(f"Request to {endpoint} failed: {exc}", endpoint=endpoint) from exc

        if status not in accept_statuses:
            raise StationSyncTransportError(
                f"HTTP {status} from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            )

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StationSyncTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        if not isinstance(body, dict):
            raise StationSyncTransportError(f"Expected a JSON object from {endpoint}", endpoint=endpoint)
        return body

    @staticmethod
    def _raise_for_failure(body: dict[str, Any], endpoint: str) -> None:
        if body.get("success") is False:
            raise StationSyncApiError(str(body.get("message", "request failed")), endpoint=endpoint)

    @staticmethod
    def _station_path(name: str) -> str:
        return f"/station/{quote(name, safe='')}"

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def sync(
        self,
        stations: Mapping[str, Sequence[Mapping[str, Any]]],
        *,
        device_id: str | None = None,
        timestamp: int | None = None,
    ) -> SyncResponse:
        """Push a batch and return the server's merged store."""
        payload: dict[str, Any] = {
            "stations": {name: [dict(record) for record in records] for name, records in stations.items()},
            "deviceId": device_id if device_id is not None else self._device_id,
            "timestamp": timestamp if timestamp is not None else _now_ms(),
        }
        # 400 and 500 replies carry a JSON body with the server's message.
        body = await self._request("POST", "/sync", payload=payload, accept_statuses=frozenset({200, 400, 500}))
        self._raise_for_failure(body, "/sync")
        return SyncResponse.model_validate(body)

    async def get_stations(self) -> StationsResponse:
        body = await self._request("GET", "/stations")
        return StationsResponse.model_validate(body)

    async def get_station(self, name: str) -> list[dict[str, Any]] | None:
        """Return a station's history, or ``None`` if the server does not know it."""
        body = await self._request("GET", self._station_path(name))
        if body.get("success") is False:
            return None
        return StationResponse.model_validate(body).records

    async def delete_station(self, name: str) -> bool:
        body = await self._request("DELETE", self._station_path(name))
        return bool(body.get("success"))

    async def get_stats(self) -> StoreStats:
        body = await self._request("GET", "/stats")
        return StoreStats.model_validate(body)

    async def health(self) -> HealthResponse:
        body = await self._request("GET", "/health")
        return HealthResponse.model_validate(body)
