"""
app/api/routers/records_router.py

Metric record entry endpoints.

Category labels are classified into enums by the request schemas; the
assigned values are echoed back in ``classification``.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_record_entry_service
from app.schemas.records import (
    EnergyRecordCreate,
    RecordCreatedResponse,
    RevenueRecordCreate,
    SafetyIncidentCreate,
    WaterRecordCreate,
)
from app.services.record_entry_service import RecordEntryService, classification_of
from db.repositories.errors import (
    CompanyInactiveError,
    CompanyNotFoundError,
    RecordPersistenceError,
)

router = APIRouter(prefix="/companies/{company_id}", tags=["records"])


def _created(company_id: uuid.UUID, write: Callable[[], Any]) -> RecordCreatedResponse:
    try:
        record = write()
    except (CompanyNotFoundError, CompanyInactiveError) as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except RecordPersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    return RecordCreatedResponse(
        id=record.id,
        company_id=company_id,
        record_type=record.__tablename__,
        created_at=record.created_at,
        classification=classification_of(record),
    )


@router.post(
    "/water-records",
    response_model=RecordCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_water_record(
    company_id: uuid.UUID,
    body: WaterRecordCreate,
    service: RecordEntryService = Depends(get_record_entry_service),
) -> RecordCreatedResponse:
    return _created(company_id, lambda: service.add_water_record(company_id, body))


@router.post(
    "/energy-records",
    response_model=RecordCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_energy_record(
    company_id: uuid.UUID,
    body: EnergyRecordCreate,
    service: RecordEntryService = Depends(get_record_entry_service),
) -> RecordCreatedResponse:
    """
    Store one energy record. Unrecognised category labels are rejected
    with 422 by request validation.
    """
    return _created(company_id, lambda: service.add_energy_record(company_id, body))


@router.post(
    "/safety-incidents",
    response_model=RecordCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_safety_incident(
    company_id: uuid.UUID,
    body: SafetyIncidentCreate,
    service: RecordEntryService = Depends(get_record_entry_service),
) -> RecordCreatedResponse:
    return _created(company_id, lambda: service.add_safety_incident(company_id, body))


@router.post(
    "/revenue-records",
    response_model=RecordCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_revenue_record(
    company_id: uuid.UUID,
    body: RevenueRecordCreate,
    service: RecordEntryService = Depends(get_record_entry_service),
) -> RecordCreatedResponse:
    return _created(company_id, lambda: service.add_revenue_record(company_id, body))
