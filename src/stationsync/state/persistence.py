"""JSON file persistence for the station store.

The whole store lives in a single JSON object ``{station: [record, ...]}``
that is rewritten wholesale on every save.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from stationsync.exceptions import PersistenceError

_logger = logging.getLogger(__name__)


class JsonFileStorage:
    """Read and write the store snapshot file."""

    def __init__(self, path: Path | str, *, atomic: bool = True) -> None:
        self._path = Path(path)
        self._atomic = atomic

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> dict[str, list[dict[str, Any]]]:
        """Read the snapshot, raising on any failure.

        Returns an empty mapping when the file does not exist.

        Raises
        ------
        PersistenceError
            If the file cannot be read, is not JSON, or is not an object of
            station lists.
        """
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Cannot read {self._path}: {exc}", path=self._path) from exc
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Invalid JSON in {self._path}: {exc}", path=self._path) from exc
        if not isinstance(payload, dict):
            raise PersistenceError(f"Expected a JSON object in {self._path}", path=self._path)

        state: dict[str, list[dict[str, Any]]] = {}
        for name, records in payload.items():
            if not isinstance(records, list):
                raise PersistenceError(f"Station {name!r} in {self._path} is not a list", path=self._path)
            kept = [record for record in records if isinstance(record, dict)]
            if len(kept) != len(records):
                _logger.warning("Dropped %d non-object record(s) for station %r", len(records) - len(kept), name)
            state[name] = kept
        return state

    def load(self) -> dict[str, list[dict[str, Any]]]:
        """Read the snapshot, falling back to an empty store on failure."""
        try:
            state = self.read()
        except PersistenceError:
            _logger.warning("Could not load stored stations; starting empty", exc_info=True)
            return {}
        if state:
            _logger.info("Loaded %d station(s) from %s", len(state), self._path)
        return state

    def save(self, state: dict[str, list[dict[str, Any]]]) -> None:
        """Serialize the whole store and replace the file.

        Raises
        ------
        PersistenceError
            If the data cannot be serialized or written.
        """
        try:
            text = json.dumps(state, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(f"Cannot serialize store: {exc}", path=self._path) from exc

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            if self._atomic:
                tmp_path = self._path.with_name(f"{self._path.name}.tmp")
                tmp_path.write_text(text, encoding="utf-8")
                os.replace(tmp_path, self._path)
            else:
                self._path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._path}: {exc}", path=self._path) from exc
        _logger.debug("Saved %d station(s) to %s", len(state), self._path)
