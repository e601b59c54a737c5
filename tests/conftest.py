"""
Shared fixtures: an in-memory KPI gateway standing in for the database.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest

from db.models.kpi import Kpi

CREATED_AT = datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc)


class InMemoryKpiGateway:
    """
    Dict-backed implementation of ``KpiGateway``.

    Every call is recorded in ``calls`` so tests can assert that the store
    was (or was not) touched.
    """

    def __init__(self) -> None:
        self.kpis: dict[int, Kpi] = {}
        self.assigned_names: list[str] = []
        self.calls: list[str] = []
        self.commits = 0
        self.rollbacks = 0

    def add_kpi(
        self,
        kpi_id: int,
        kpi_name: str,
        form_data: list[Any] | None = None,
    ) -> Kpi:
        kpi = Kpi(
            kpi_id=kpi_id,
            kpi_name=kpi_name,
            form_data=form_data if form_data is not None else [],
            kpi_created_at=CREATED_AT,
            kpi_updated_at=CREATED_AT,
        )
        self.kpis[kpi_id] = kpi
        return kpi

    def assign(self, kpi_name: str) -> None:
        self.assigned_names.append(kpi_name)

    # -- KpiGateway -------------------------------------------------------

    def find_kpi(self, kpi_id: int) -> Kpi | None:
        self.calls.append("find_kpi")
        return self.kpis.get(kpi_id)

    def update_form_data(
        self,
        kpi_id: int,
        *,
        form_data: list[Any],
        updated_at: datetime,
    ) -> Kpi | None:
        self.calls.append("update_form_data")
        kpi = self.kpis.get(kpi_id)
        if kpi is None:
            return None
        kpi.form_data = list(form_data)
        kpi.kpi_updated_at = updated_at
        return kpi

    def has_assignments(self, kpi_name: str) -> bool:
        self.calls.append("has_assignments")
        return kpi_name in self.assigned_names

    def delete_unassigned(self, kpi_id: int) -> bool:
        self.calls.append("delete_unassigned")
        kpi = self.kpis.get(kpi_id)
        if kpi is None or kpi.kpi_name in self.assigned_names:
            return False
        del self.kpis[kpi_id]
        return True

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


@pytest.fixture()
def gateway() -> InMemoryKpiGateway:
    store = InMemoryKpiGateway()
    store.add_kpi(1, "customer_satisfaction", [{"type": "rating", "label": "Score"}])
    store.add_kpi(2, "on_time_delivery", [])
    return store
