"""stationsync - Merge station record batches from field devices into a bounded JSON store."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("station-sync")
except PackageNotFoundError:
    __version__ = "0+local"
from stationsync.client import StationSyncClient
from stationsync.config import ServerConfig
from stationsync.exceptions import (
    InvalidInputError,
    PersistenceError,
    StationSyncApiError,
    StationSyncConfigError,
    StationSyncError,
    StationSyncTransportError,
)
from stationsync.models import (
    StationRecord,
    StationStats,
    StoreStats,
    SyncRequest,
    SyncResponse,
)
from stationsync.server import create_app
from stationsync.state.merge import merge_batch
from stationsync.state.persistence import JsonFileStorage
from stationsync.state.store import StationStore

__all__ = [
    "__version__",
    "InvalidInputError",
    "JsonFileStorage",
    "PersistenceError",
    "ServerConfig",
    "StationRecord",
    "StationStats",
    "StationStore",
    "StationSyncApiError",
    "StationSyncClient",
    "StationSyncConfigError",
    "StationSyncError",
    "StationSyncTransportError",
    "StoreStats",
    "SyncRequest",
    "SyncResponse",
    "create_app",
    "merge_batch",
]
