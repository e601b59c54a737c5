"""
db/models/kpi.py

KPI definition model: a named form definition plus timestamps.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, JSONDocument, timestamp_column


class Kpi(Base):
    """
    One KPI form definition.

    ``form_data`` holds the ordered list of form elements exactly as the
    frontend submitted them; its inner structure is opaque to the API.
    ``kpi_name`` is referenced by ``assigned_kpi.kpi_name``. That reference
    is enforced by the service layer rather than a foreign key.
    """

    __tablename__ = "kpi"

    kpi_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    kpi_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )

    form_data: Mapped[list[Any]] = mapped_column(
        JSONDocument,
        nullable=False,
        default=list,
        comment="Ordered form element definitions",
    )

    kpi_created_at: Mapped[datetime] = timestamp_column()

    kpi_updated_at: Mapped[datetime] = timestamp_column(
        comment="Refreshed on every form update",
    )

    def __repr__(self) -> str:
        return f"<Kpi kpi_id={self.kpi_id} kpi_name={self.kpi_name!r}>"
