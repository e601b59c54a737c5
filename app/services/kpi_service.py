"""
app/services/kpi_service.py

Read, update and delete operations for KPI definitions.

Failure contract
----------------
- Unknown or unparseable id          → KpiNotFoundError
- KPI referenced by assigned_kpi     → KpiInUseError (nothing deleted)
- Any storage error                  → propagates after rollback

The service only talks to a :class:`KpiGateway`, so tests can substitute
an in-memory store for the SQLAlchemy repository.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from app.logging_utils import log_event
from app.mappers.kpi_mapper import to_kpi_document
from app.validators.kpi_validator import KpiUpdate
from db.repositories.kpi_repository import KpiGateway

logger = logging.getLogger(__name__)

KPI_NOT_FOUND_MESSAGE = "KPI not found"
KPI_IN_USE_MESSAGE = "Cannot delete KPI that is in use. Remove all assigned instances first."


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class KpiServiceError(Exception):
    """Base class for expected KPI service failures."""


class KpiNotFoundError(KpiServiceError):
    """Raised when no kpi row matches the requested id."""

    def __init__(self, kpi_id: int | None) -> None:
        super().__init__(KPI_NOT_FOUND_MESSAGE)
        self.kpi_id = kpi_id


class KpiInUseError(KpiServiceError):
    """Raised when a delete is refused because assigned_kpi rows reference the KPI."""

    def __init__(self, kpi_id: int, kpi_name: str) -> None:
        super().__init__(KPI_IN_USE_MESSAGE)
        self.kpi_id = kpi_id
        self.kpi_name = kpi_name


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class KpiService:
    def __init__(self, gateway: KpiGateway) -> None:
        self._gateway = gateway

    def get_kpi(self, kpi_id: int | None) -> dict[str, Any]:
        if kpi_id is None:
            raise KpiNotFoundError(kpi_id)
        kpi = self._gateway.find_kpi(kpi_id)
        if kpi is None:
            raise KpiNotFoundError(kpi_id)
        return to_kpi_document(kpi)

    def update_kpi(
        self,
        kpi_id: int | None,
        update: KpiUpdate,
        *,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """
        Replace the KPI's form elements and stamp ``kpi_updated_at``.

        ``kpi_name`` is never changed. ``update.updated_at`` wins over
        ``now``, which defaults to the current UTC time.
        """
        if kpi_id is None or self._gateway.find_kpi(kpi_id) is None:
            raise KpiNotFoundError(kpi_id)

        updated_at = update.updated_at or now or datetime.now(tz=timezone.utc)
        try:
            kpi = self._gateway.update_form_data(
                kpi_id,
                form_data=update.elements,
                updated_at=updated_at,
            )
            if kpi is None:
                # Deleted between the existence check and the write.
                self._gateway.rollback()
                raise KpiNotFoundError(kpi_id)
            self._gateway.commit()
        except KpiServiceError:
            raise
        except Exception:
            self._gateway.rollback()
            raise

        log_event(
            logger,
            logging.INFO,
            "kpi_updated",
            kpi_id=kpi_id,
            element_count=len(update.elements),
            updated_at=updated_at,
        )
        return to_kpi_document(kpi)

    def delete_kpi(self, kpi_id: int | None) -> None:
        """
        Delete a KPI unless assigned_kpi rows still reference its name.
        """
        if kpi_id is None:
            raise KpiNotFoundError(kpi_id)
        kpi = self._gateway.find_kpi(kpi_id)
        if kpi is None:
            raise KpiNotFoundError(kpi_id)

        kpi_name = kpi.kpi_name
        if self._gateway.has_assignments(kpi_name):
            log_event(logger, logging.INFO, "kpi_delete_blocked", kpi_id=kpi_id, kpi_name=kpi_name)
            raise KpiInUseError(kpi_id, kpi_name)

        try:
            deleted = self._gateway.delete_unassigned(kpi_id)
            if not deleted:
                self._gateway.rollback()
                self._raise_for_lost_delete(kpi_id, kpi_name)
            self._gateway.commit()
        except KpiServiceError:
            raise
        except Exception:
            self._gateway.rollback()
            raise

        log_event(logger, logging.INFO, "kpi_deleted", kpi_id=kpi_id, kpi_name=kpi_name)

    def _raise_for_lost_delete(self, kpi_id: int, kpi_name: str) -> None:
        # The conditional delete matched nothing: either an assignment was
        # added after the probe, or the row is already gone.
        if self._gateway.has_assignments(kpi_name):
            log_event(logger, logging.INFO, "kpi_delete_blocked", kpi_id=kpi_id, kpi_name=kpi_name)
            raise KpiInUseError(kpi_id, kpi_name)
        raise KpiNotFoundError(kpi_id)
