"""
app/validators/kpi_validator.py

Request parsing for the KPI endpoints. Pure functions, no I/O.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

# kpi.kpi_id is a 32-bit signed INTEGER column.
_KPI_ID_MIN = -(2**31)
_KPI_ID_MAX = 2**31 - 1

INVALID_JSON_MESSAGE = "Invalid JSON in request body"
INVALID_ELEMENTS_MESSAGE = "Form elements are required and must be an array"
INVALID_UPDATED_AT_MESSAGE = "updatedAt must be an ISO-8601 timestamp"


class KpiPayloadError(ValueError):
    """
    Raised when a request body cannot be parsed or fails shape validation.

    ``str(exc)`` is safe to return to the caller.
    """


@dataclass(frozen=True)
class KpiUpdate:
    """
    Validated PUT payload.
    """

    elements: list[Any]
    updated_at: datetime | None = None


def parse_kpi_id(raw: str) -> int | None:
    """
    Convert a path identifier to a ``kpi_id``.

    Integral numeric text such as ``"7"``, ``"7.0"`` or ``"7e0"`` maps to
    7. Returns ``None`` for anything that cannot match a row: blank or
    non-numeric text, fractional or non-finite numbers, and integers
    outside the column range.
    """

    if not isinstance(raw, str) or not raw.strip():
        return None
    text = raw.strip()
    try:
        value = int(text)
    except ValueError:
        try:
            number = float(text)
        except ValueError:
            return None
        if not math.isfinite(number) or not number.is_integer():
            return None
        value = int(number)
    if not _KPI_ID_MIN <= value <= _KPI_ID_MAX:
        return None
    return value


def _reject_constant(name: str) -> Any:
    # json.loads accepts NaN, Infinity and -Infinity, which are not JSON.
    raise KpiPayloadError(INVALID_JSON_MESSAGE)


def parse_json_body(raw: bytes | str) -> Any:
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise KpiPayloadError(INVALID_JSON_MESSAGE) from exc


def parse_updated_at(value: Any) -> datetime:
    """
    Parse an ISO-8601 timestamp string. Naive values are taken as UTC.
    """

    if not isinstance(value, str) or not value.strip():
        raise KpiPayloadError(INVALID_UPDATED_AT_MESSAGE)
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise KpiPayloadError(INVALID_UPDATED_AT_MESSAGE) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_update_payload(body: Any) -> KpiUpdate:
    """
    Validate a decoded PUT body.

    ``elements`` must be present and a JSON array (an empty array is
    allowed). ``updatedAt`` is optional; ``null`` or an empty string means
    "use the current time".
    """

    if not isinstance(body, dict):
        raise KpiPayloadError(INVALID_ELEMENTS_MESSAGE)

    elements = body.get("elements")
    if not isinstance(elements, list):
        raise KpiPayloadError(INVALID_ELEMENTS_MESSAGE)

    raw_updated_at = body.get("updatedAt")
    updated_at = parse_updated_at(raw_updated_at) if raw_updated_at else None
    return KpiUpdate(elements=elements, updated_at=updated_at)
