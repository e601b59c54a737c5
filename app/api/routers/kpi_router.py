"""
app/api/routers/kpi_router.py

KPI definition endpoints: fetch, update form elements, delete.

All responses use the ``{"success": ...}`` envelope. Expected failures map
to 400/404; anything else is logged and returned as a generic 500 without
internal detail.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.api.dependencies import get_kpi_service
from app.schemas.kpi import (
    ErrorResponse,
    KpiDeletedResponse,
    KpiDocument,
    KpiResponse,
    KpiUpdatedResponse,
)
from app.services.kpi_service import KpiInUseError, KpiNotFoundError, KpiService
from app.validators.kpi_validator import (
    KpiPayloadError,
    parse_json_body,
    parse_kpi_id,
    parse_update_payload,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/kpi", tags=["kpi"])

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def _ok(payload: BaseModel) -> JSONResponse:
    # Serialized inside the handler so a malformed stored row still yields
    # the error envelope.
    return JSONResponse(content=payload.model_dump(mode="json"))


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/{kpi_id}",
    response_model=KpiResponse,
    responses=_ERROR_RESPONSES,
)
def get_kpi(
    kpi_id: str,
    service: KpiService = Depends(get_kpi_service),
) -> JSONResponse:
    """
    Fetch one KPI definition.
    """
    try:
        document = service.get_kpi(parse_kpi_id(kpi_id))
        response = _ok(KpiResponse(kpi=KpiDocument(**document)))
    except KpiNotFoundError as exc:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))
    except Exception:
        logger.exception("Error fetching KPI kpi_id=%r", kpi_id)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch KPI")

    return response


@router.put(
    "/{kpi_id}",
    response_model=KpiUpdatedResponse,
    responses=_ERROR_RESPONSES,
)
async def update_kpi(
    kpi_id: str,
    request: Request,
    service: KpiService = Depends(get_kpi_service),
) -> JSONResponse:
    """
    Replace a KPI's form elements.

    Body: ``{"elements": [...], "updatedAt": "<ISO-8601>"?}``. The body is
    validated before any database access.
    """
    try:
        try:
            update = parse_update_payload(parse_json_body(await request.body()))
        except KpiPayloadError as exc:
            logger.warning("Rejected KPI update kpi_id=%r: %s", kpi_id, exc)
            return _error(status.HTTP_400_BAD_REQUEST, str(exc))

        document = await run_in_threadpool(service.update_kpi, parse_kpi_id(kpi_id), update)
        response = _ok(KpiUpdatedResponse(kpi=KpiDocument(**document)))
    except KpiNotFoundError as exc:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))
    except Exception:
        logger.exception("Error updating KPI kpi_id=%r", kpi_id)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to update KPI")

    return response


@router.delete(
    "/{kpi_id}",
    response_model=KpiDeletedResponse,
    responses=_ERROR_RESPONSES,
)
def delete_kpi(
    kpi_id: str,
    service: KpiService = Depends(get_kpi_service),
) -> KpiDeletedResponse | JSONResponse:
    """
    Delete a KPI.

    Refused with 400 while any assigned_kpi row references the KPI's name.
    """
    try:
        service.delete_kpi(parse_kpi_id(kpi_id))
    except KpiNotFoundError as exc:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))
    except KpiInUseError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except Exception:
        logger.exception("Error deleting KPI kpi_id=%r", kpi_id)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to delete KPI")

    return KpiDeletedResponse()
