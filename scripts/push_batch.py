#!/usr/bin/env python3
"""Push a batch of station records to a running station-sync server.

The batch file holds the ``stations`` mapping a device would send::

    {"P1": [{"savedAt": "2024-01-01T08:00:00Z", "level": 3.2}]}

Usage
-----
::

    python scripts/push_batch.py batch.json --url http://localhost:3000
    python scripts/push_batch.py batch.json --device-id tablet-7 --stats

Options::

    --url URL          Server base URL (default: STATION_SYNC_URL or http://localhost:3000)
    --device-id ID     Device identifier reported to the server
    --stats            Print /stats after the sync instead of the full store
    --verbose, -v      Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from stationsync import StationSyncClient, StationSyncError  # noqa: E402


async def main() -> int:
    parser = argparse.ArgumentParser(description="Push a station batch to a station-sync server")
    parser.add_argument("batch", type=Path, help="JSON file with the stations mapping")
    parser.add_argument("--url", default=os.environ.get("STATION_SYNC_URL", "http://localhost:3000"))
    parser.add_argument("--device-id", default="push-batch-script")
    parser.add_argument("--stats", action="store_true", help="Print /stats after syncing")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        stations = json.loads(args.batch.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Cannot read batch file {args.batch}: {exc}", file=sys.stderr)
        return 1

    try:
        async with StationSyncClient(args.url, device_id=args.device_id) as client:
            result = await client.sync(stations)
            if args.stats:
                output = (await client.get_stats()).to_wire()
            else:
                output = result.to_wire()
    except StationSyncError as exc:
        print(f"Sync failed: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
