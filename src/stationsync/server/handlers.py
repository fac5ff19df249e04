"""Request handlers for the sync HTTP surface."""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import UTC, datetime
from typing import Any

from aiohttp import web

from stationsync._constants import (
    MSG_INVALID_PAYLOAD,
    MSG_SERVER_ERROR,
    MSG_STATION_NOT_FOUND,
    MSG_SYNC_OK,
    station_deleted_message,
)
from stationsync._redact import redact_for_log
from stationsync.exceptions import InvalidInputError
from stationsync.ingestion.normalize import iso_now, to_iso
from stationsync.ingestion.payload import parse_sync_request
from stationsync.models.responses import (
    HealthResponse,
    InvalidPayloadResponse,
    MessageResponse,
    StationResponse,
    StationsResponse,
    SyncResponse,
)
from stationsync.server.keys import CONFIG_KEY, STARTED_AT_KEY, STORE_KEY
from stationsync.server.pages import render_index

try:
    import resource
except ImportError:  # pragma: no cover - not available on Windows
    resource = None  # type: ignore[assignment]

_logger = logging.getLogger(__name__)


def _json(model: Any, *, status: int = 200) -> web.Response:
    return web.json_response(model.to_wire(), status=status)


def _device_time(timestamp: float | None) -> str | None:
    if timestamp is None:
        return None
    try:
        return to_iso(datetime.fromtimestamp(timestamp / 1000.0, tz=UTC))
    except (OverflowError, OSError, ValueError):
        return str(timestamp)


def _memory_snapshot() -> dict[str, int | None]:
    if resource is None:
        return {"maxRss": None}
    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # Linux reports kilobytes, macOS bytes.
    if sys.platform != "darwin":
        max_rss *= 1024
    return {"maxRss": max_rss}


@web.middleware
async def error_middleware(request: web.Request, handler: Any) -> web.StreamResponse:
    """Map stationsync failures to JSON replies.

    Invalid sync payloads become 400 with validation details; anything
    unexpected becomes a generic 500 without leaking internals.
    """
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except InvalidInputError as exc:
        _logger.warning("Rejected sync payload: %s", exc)
        return _json(InvalidPayloadResponse(message=MSG_INVALID_PAYLOAD, errors=exc.errors), status=400)
    except Exception:
        _logger.exception("Unhandled error processing %s %s", request.method, request.path)
        return _json(MessageResponse(success=False, message=MSG_SERVER_ERROR), status=500)


async def _read_json(request: web.Request) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidInputError(
            "sync body is not valid JSON",
            errors=[{"loc": "", "msg": str(exc), "type": "json_invalid"}],
        ) from exc


async def handle_sync(request: web.Request) -> web.Response:
    body = await _read_json(request)
    if _logger.isEnabledFor(logging.DEBUG):
        _logger.debug("Sync payload: %s", redact_for_log(body))
    payload = parse_sync_request(body)

    _logger.info(
        "Receiving data from device %s (sent %s): %d station(s)",
        payload.device_id,
        _device_time(payload.timestamp),
        len(payload.stations),
    )
    stations = await request.app[STORE_KEY].sync(payload.batch())

    return _json(SyncResponse(message=MSG_SYNC_OK, stations=stations, server_time=iso_now()))


async def handle_stations(request: web.Request) -> web.Response:
    stations = request.app[STORE_KEY].snapshot()
    return _json(StationsResponse(stations=stations, count=len(stations), last_update=iso_now()))


async def handle_station(request: web.Request) -> web.Response:
    name = request.match_info["name"]
    records = request.app[STORE_KEY].get(name)
    if records is None:
        return _json(MessageResponse(success=False, message=MSG_STATION_NOT_FOUND))
    return _json(StationResponse(station_name=name, records=records))


async def handle_delete_station(request: web.Request) -> web.Response:
    name = request.match_info["name"]
    if not await request.app[STORE_KEY].delete(name):
        return _json(MessageResponse(success=False, message=MSG_STATION_NOT_FOUND))
    return _json(MessageResponse(success=True, message=station_deleted_message(name)))


async def handle_stats(request: web.Request) -> web.Response:
    return _json(request.app[STORE_KEY].stats())


async def handle_health(request: web.Request) -> web.Response:
    uptime = time.monotonic() - request.app[STARTED_AT_KEY]
    return _json(HealthResponse(uptime=round(uptime, 3), memory=_memory_snapshot(), timestamp=iso_now()))


async def handle_index(request: web.Request) -> web.Response:
    page = render_index(port=request.app[CONFIG_KEY].port, station_count=len(request.app[STORE_KEY]))
    return web.Response(text=page, content_type="text/html")
