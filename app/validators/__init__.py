"""
app/validators package marker.
"""

from app.validators.kpi_validator import (
    KpiPayloadError,
    KpiUpdate,
    parse_json_body,
    parse_kpi_id,
    parse_update_payload,
)

__all__ = [
    "KpiPayloadError",
    "KpiUpdate",
    "parse_json_body",
    "parse_kpi_id",
    "parse_update_payload",
]
