"""
app/schemas/kpi.py

Response envelopes for the KPI endpoints.

Every response carries ``success``; successful ones add ``kpi`` and/or
``message``, failed ones add ``error``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class KpiDocument(BaseModel):
    """
    KPI as exposed to the frontend: ``id`` mirrors ``kpi_name`` and
    ``elements`` passes the stored form data through unchanged.
    """

    kpi_id: int
    kpi_name: str
    kpi_created_at: datetime
    kpi_updated_at: datetime
    id: str
    elements: Any = Field(default_factory=list)


class KpiResponse(BaseModel):
    success: bool = True
    kpi: KpiDocument


class KpiUpdatedResponse(BaseModel):
    success: bool = True
    message: str = "KPI updated successfully"
    kpi: KpiDocument


class KpiDeletedResponse(BaseModel):
    success: bool = True
    message: str = "KPI deleted successfully"


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
