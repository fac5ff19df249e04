"""Application factory and runner."""

from __future__ import annotations

import logging
import time

import aiohttp_cors
from aiohttp import web

from stationsync.config import ServerConfig
from stationsync.server import handlers
from stationsync.server.keys import CONFIG_KEY, STARTED_AT_KEY, STORE_KEY
from stationsync.state.persistence import JsonFileStorage
from stationsync.state.store import StationStore

_logger = logging.getLogger(__name__)


async def _flush_store(app: web.Application) -> None:
    await app[STORE_KEY].flush()


def _setup_cors(app: web.Application, config: ServerConfig) -> None:
    options = aiohttp_cors.ResourceOptions(
        allow_credentials=False,
        expose_headers="*",
        allow_headers="*",
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    )
    cors = aiohttp_cors.setup(app, defaults={origin: options for origin in config.cors_origins})
    for route in list(app.router.routes()):
        cors.add(route)


def create_app(config: ServerConfig | None = None, *, store: StationStore | None = None) -> web.Application:
    """Build the aiohttp application.

    When *store* is omitted a :class:`StationStore` backed by
    ``config.data_file`` is created and loaded here. A caller-supplied store
    is used as-is; loading it is the caller's job.
    """
    if config is None:
        config = ServerConfig()
    if store is None:
        storage = JsonFileStorage(config.data_file, atomic=config.atomic_writes)
        store = StationStore(storage, max_records=config.max_records)
        store.load()

    app = web.Application(middlewares=[handlers.error_middleware])
    app[CONFIG_KEY] = config
    app[STORE_KEY] = store
    app[STARTED_AT_KEY] = time.monotonic()

    app.router.add_post("/sync", handlers.handle_sync)
    app.router.add_get("/stations", handlers.handle_stations)
    app.router.add_get("/station/{name}", handlers.handle_station)
    app.router.add_delete("/station/{name}", handlers.handle_delete_station)
    app.router.add_get("/stats", handlers.handle_stats)
    app.router.add_get("/health", handlers.handle_health)
    app.router.add_get("/", handlers.handle_index)

    if config.cors_enabled:
        _setup_cors(app, config)

    app.on_cleanup.append(_flush_store)
    return app


def run(config: ServerConfig) -> None:
    """Serve until interrupted."""
    app = create_app(config)
    _logger.info("Serving %d station(s) on http://%s:%d", len(app[STORE_KEY]), config.host, config.port)
    web.run_app(app, host=config.host, port=config.port, print=None)
