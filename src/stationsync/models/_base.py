"""Base model for stationsync wire payloads.

Every request/response model inherits from :class:`StationSyncModel` which
provides:

* ``alias_generator=to_camel`` so the camelCase keys devices send and
  expect map automatically to snake_case fields.
* :meth:`StationSyncModel.to_wire` which dumps by alias, ready for
  ``json.dumps``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StationSyncModel(BaseModel):
    """Base for stationsync request and response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump using camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
