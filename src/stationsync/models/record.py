"""Station record model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from stationsync._constants import SAVED_AT_KEY
from stationsync.ingestion.normalize import parse_saved_at


class StationRecord(BaseModel):
    """One timestamped data point submitted by a device for a station.

    Only ``savedAt`` is inspected; every other key is kept as an extra field
    and carried through unchanged.

    Parameters
    ----------
    saved_at : str or int or float
        ISO-8601 timestamp string, or epoch milliseconds. The raw value is
        the deduplication key; its parsed value is the sort key.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    saved_at: str | int | float = Field(alias=SAVED_AT_KEY)

    _key_order: tuple[str, ...] = PrivateAttr(default=())

    @field_validator("saved_at", mode="before")
    @classmethod
    def _require_timestamp(cls, value: Any) -> Any:
        if parse_saved_at(value) is None:
            raise ValueError(f"{SAVED_AT_KEY} must be an ISO-8601 timestamp or epoch milliseconds")
        return value

    @model_validator(mode="wrap")
    @classmethod
    def _remember_key_order(cls, value: Any, handler: Any) -> Any:
        record = handler(value)
        if isinstance(value, dict):
            record._key_order = tuple(value)
        return record

    def to_dict(self) -> dict[str, Any]:
        """Return the record as received, keys in their original order."""
        dumped = self.model_dump(by_alias=True)
        if not self._key_order:
            return dumped
        return {key: dumped[key] for key in self._key_order if key in dumped}
