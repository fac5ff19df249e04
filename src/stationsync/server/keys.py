"""Typed application keys shared by the app factory and handlers."""

from __future__ import annotations

from aiohttp import web

from stationsync.config import ServerConfig
from stationsync.state.store import StationStore

CONFIG_KEY = web.AppKey("config", ServerConfig)
STORE_KEY = web.AppKey("store", StationStore)
STARTED_AT_KEY = web.AppKey("started_at", float)
