"""
db/repositories/kpi_repository.py

Persistence gateway for KPI definitions and their assignment guard.

The repository never commits on its own; the caller controls
commit/rollback through :meth:`KpiRepository.commit` and
:meth:`KpiRepository.rollback`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from db.models.assigned_kpi import AssignedKpi
from db.models.kpi import Kpi


class KpiGateway(Protocol):
    """
    Storage operations the KPI service depends on.
    """

    def find_kpi(self, kpi_id: int) -> Kpi | None:
        ...

    def update_form_data(
        self,
        kpi_id: int,
        *,
        form_data: list[Any],
        updated_at: datetime,
    ) -> Kpi | None:
        ...

    def has_assignments(self, kpi_name: str) -> bool:
        ...

    def delete_unassigned(self, kpi_id: int) -> bool:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...


class KpiRepository:
    """
    SQLAlchemy implementation of :class:`KpiGateway`.

    Writes are single conditional statements, so a row removed by a
    concurrent request surfaces as ``None`` / ``False`` instead of an error.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def find_kpi(self, kpi_id: int) -> Kpi | None:
        return self._session.get(Kpi, kpi_id)

    def has_assignments(self, kpi_name: str) -> bool:
        """
        Return True when at least one assigned_kpi row references ``kpi_name``.
        """
        stmt = (
            select(AssignedKpi.assigned_kpi_id)
            .where(AssignedKpi.kpi_name == kpi_name)
            .limit(1)
        )
        return self._session.scalars(stmt).first() is not None

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def update_form_data(
        self,
        kpi_id: int,
        *,
        form_data: list[Any],
        updated_at: datetime,
    ) -> Kpi | None:
        """
        Replace ``form_data`` and stamp ``kpi_updated_at`` in one statement.

        Returns
        -------
        Kpi | None
            The updated row, or ``None`` when no row matched ``kpi_id``.
        """
        stmt = (
            update(Kpi)
            .where(Kpi.kpi_id == kpi_id)
            .values(form_data=form_data, kpi_updated_at=updated_at)
            .returning(Kpi)
            .execution_options(populate_existing=True)
        )
        return self._session.scalars(stmt).one_or_none()

    def delete_unassigned(self, kpi_id: int) -> bool:
        """
        Delete the KPI only while no assigned_kpi row references its name.

        The assignment check and the delete run as one statement::

            DELETE FROM kpi
            WHERE kpi_id = :kpi_id
              AND NOT EXISTS (
                  SELECT 1 FROM assigned_kpi
                  WHERE assigned_kpi.kpi_name = kpi.kpi_name
              )

        Returns True when a row was removed.
        """
        in_use = (
            select(AssignedKpi.assigned_kpi_id)
            .where(AssignedKpi.kpi_name == Kpi.kpi_name)
            .correlate(Kpi)
            .exists()
        )
        stmt = (
            delete(Kpi)
            .where(Kpi.kpi_id == kpi_id, ~in_use)
            .execution_options(synchronize_session=False)
        )
        result = self._session.execute(stmt)
        return bool(result.rowcount)

    # ------------------------------------------------------------------
    # Transaction control
    # ------------------------------------------------------------------

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()
