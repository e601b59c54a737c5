"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.assigned_kpi import AssignedKpi
from db.models.kpi import Kpi

__all__ = [
    "AssignedKpi",
    "Kpi",
]
