"""Command-line entry point: ``python -m stationsync`` / ``station-sync``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from stationsync.config import ServerConfig
from stationsync.exceptions import StationSyncConfigError
from stationsync.server import run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="station-sync",
        description="Collect station record batches from devices and serve the merged history.",
    )
    parser.add_argument("--host", help="Interface to bind (default: STATION_SYNC_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="TCP port (default: STATION_SYNC_PORT or 3000)")
    parser.add_argument("--data-file", type=Path, help="JSON file holding the store")
    parser.add_argument("--max-records", type=int, help="Records kept per station (default: 50)")
    parser.add_argument("--no-cors", action="store_true", help="Do not send CORS headers")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = ServerConfig.from_env(
            host=args.host,
            port=args.port,
            data_file=args.data_file,
            max_records=args.max_records,
            cors_enabled=False if args.no_cors else None,
        )
    except StationSyncConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    run(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
