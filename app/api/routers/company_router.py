"""
app/api/routers/company_router.py

Company (tenant) management endpoints.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db.models.company import Company
from db.session import get_db

router = APIRouter(prefix="/companies", tags=["companies"])


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class CompanyCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    sector: str | None = Field(default=None, max_length=100)


class CompanyResponse(BaseModel):
    id: uuid.UUID
    name: str
    sector: str | None
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_company(
    body: CompanyCreateRequest,
    db: Session = Depends(get_db),
) -> CompanyResponse:
    """
    Create a new company.

    Raises HTTP 409 if a company with the same name already exists.
    """
    company = Company(name=body.name.strip(), sector=body.sector)
    db.add(company)
    try:
        db.commit()
        db.refresh(company)
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"A company with name {body.name!r} already exists.",
        )
    return CompanyResponse.model_validate(company)
