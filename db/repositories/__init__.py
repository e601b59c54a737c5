"""
Repository layer exports.
"""

from db.repositories.kpi_repository import KpiGateway, KpiRepository

__all__ = [
    "KpiGateway",
    "KpiRepository",
]
