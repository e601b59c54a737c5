"""
db/models/assigned_kpi.py

Assignment of a KPI to its consumers. Read-only from the KPI API's
perspective; rows are written by the assignment workflow.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, timestamp_column


class AssignedKpi(Base):
    """
    Marks a KPI (by name) as in active use.

    Any row referencing a ``kpi_name`` blocks deletion of that KPI.
    """

    __tablename__ = "assigned_kpi"

    assigned_kpi_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    kpi_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Name of the referenced kpi row",
    )

    assigned_at: Mapped[datetime] = timestamp_column()

    __table_args__ = (
        Index("ix_assigned_kpi_kpi_name", "kpi_name"),
    )

    def __repr__(self) -> str:
        return f"<AssignedKpi id={self.assigned_kpi_id} kpi_name={self.kpi_name!r}>"
