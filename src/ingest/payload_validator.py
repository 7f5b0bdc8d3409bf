"""JSON payload validation for the save endpoint.

This module parses request bodies and extracts the identifiers used for
file placement. It never re-serializes the body: callers persist the
original bytes.
"""

from __future__ import annotations

import json

from core.constants import (
    INVALID_JSON_MESSAGE,
    MAJOR_RUN_ID_FIELD,
    MINOR_RUN_ID_FIELD,
    MISSING_NAME_MESSAGE,
    NAME_FIELD,
)
from core.errors import MalformedJsonError, MissingNameError
from core.types import ValidatedPayload


def validate_payload(body: bytes) -> ValidatedPayload:
    """Parse a request body and extract its identifiers.

    Args:
        body: Raw request body.

    Returns:
        Validated identifiers for the payload.

    Raises:
        MalformedJsonError: If body is not parseable JSON.
        MissingNameError: If body is not an object with a non-empty string name.
    """
    try:
        payload = json.loads(body, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as error:
        raise MalformedJsonError(INVALID_JSON_MESSAGE) from error
    if not isinstance(payload, dict):
        raise MissingNameError(MISSING_NAME_MESSAGE)
    name = payload.get(NAME_FIELD)
    if not isinstance(name, str) or not name:
        raise MissingNameError(MISSING_NAME_MESSAGE)
    return ValidatedPayload(
        name=name,
        major_run_id=_optional_string(payload, MAJOR_RUN_ID_FIELD),
        minor_run_id=_optional_string(payload, MINOR_RUN_ID_FIELD),
    )


def _optional_string(payload: dict[str, object], field_name: str) -> str:
    """Return a string grouping hint, treating absent or non-string values as empty."""
    value = payload.get(field_name)
    return value if isinstance(value, str) else ""


def _reject_constant(constant: str) -> object:
    """Refuse the NaN and Infinity literals that are not part of JSON."""
    raise ValueError(f"Non-standard JSON constant {constant!r}")
