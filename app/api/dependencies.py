"""
app/api/dependencies.py

Shared FastAPI dependencies wiring the KPI service to the database.
"""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from app.services.kpi_service import KpiService
from db.repositories.kpi_repository import KpiGateway, KpiRepository
from db.session import get_db


def get_kpi_gateway(db: Session = Depends(get_db)) -> KpiGateway:
    """
    Request-scoped persistence gateway. Override in tests to swap the store.
    """

    return KpiRepository(db)


def get_kpi_service(gateway: KpiGateway = Depends(get_kpi_gateway)) -> KpiService:
    return KpiService(gateway)
