"""
app/services package marker.
"""

from app.services.kpi_service import (
    KpiInUseError,
    KpiNotFoundError,
    KpiService,
    KpiServiceError,
)

__all__ = [
    "KpiInUseError",
    "KpiNotFoundError",
    "KpiService",
    "KpiServiceError",
]
