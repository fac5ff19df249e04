"""Sync payload validation.

The whole request body is validated before the store is touched, so a
malformed station anywhere in the batch rejects the entire request.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from stationsync.exceptions import InvalidInputError
from stationsync.models.sync import SyncRequest


def _format_errors(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {
            "loc": ".".join(str(part) for part in error["loc"]),
            "msg": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


def parse_sync_request(body: Any) -> SyncRequest:
    """Validate a decoded ``POST /sync`` body.

    Raises
    ------
    InvalidInputError
        If the body is not an object, ``stations`` is missing or not a
        mapping of lists, or any record lacks a parseable ``savedAt``.
    """
    if not isinstance(body, dict):
        raise InvalidInputError(
            "sync body must be a JSON object",
            errors=[{"loc": "", "msg": "expected a JSON object", "type": "dict_type"}],
        )
    try:
        return SyncRequest.model_validate(body)
    except ValidationError as exc:
        errors = _format_errors(exc)
        raise InvalidInputError(f"invalid sync payload ({len(errors)} error(s))", errors=errors) from exc
