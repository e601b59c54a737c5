"""
app/schemas package marker.
"""

from app.schemas.kpi import (
    ErrorResponse,
    KpiDeletedResponse,
    KpiDocument,
    KpiResponse,
    KpiUpdatedResponse,
)

__all__ = [
    "ErrorResponse",
    "KpiDeletedResponse",
    "KpiDocument",
    "KpiResponse",
    "KpiUpdatedResponse",
]
