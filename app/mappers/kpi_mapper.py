"""
app/mappers/kpi_mapper.py

Maps persisted KPI rows to the document shape the frontend consumes.
"""

from __future__ import annotations

from typing import Any


def to_kpi_document(record: Any) -> dict[str, Any]:
    """
    Reshape a ``kpi`` row for API responses.

    ``kpi_name`` is exposed both as itself and as ``id``; ``form_data`` is
    exposed only as ``elements``.
    """

    return {
        "kpi_id": record.kpi_id,
        "kpi_name": record.kpi_name,
        "kpi_created_at": record.kpi_created_at,
        "kpi_updated_at": record.kpi_updated_at,
        "id": record.kpi_name,
        "elements": record.form_data,
    }
