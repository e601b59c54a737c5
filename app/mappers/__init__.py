"""
app/mappers package marker.
"""

from app.mappers.kpi_mapper import to_kpi_document

__all__ = [
    "to_kpi_document",
]
