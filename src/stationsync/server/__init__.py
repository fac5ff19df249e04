"""aiohttp application exposing the station store over JSON/HTTP."""

from stationsync.server.app import create_app, run
from stationsync.server.keys import CONFIG_KEY, STARTED_AT_KEY, STORE_KEY

__all__ = ["CONFIG_KEY", "STARTED_AT_KEY", "STORE_KEY", "create_app", "run"]
