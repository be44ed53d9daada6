"""
app/schemas/records.py

Request/response schemas for metric record entry.

Free-text category labels are classified into their enums here, once, so
the store and the calculators only ever see enum members.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from app.domain.categories import (
    EnergyCategory,
    IncidentType,
    ReuseApplication,
    RevenueSustainabilityCategory,
    WaterSource,
    is_renewable_energy_source,
)


class _PeriodRecord(BaseModel):
    period_start_date: date
    period_end_date: date

    @model_validator(mode="after")
    def _check_period(self) -> "_PeriodRecord":
        if self.period_start_date > self.period_end_date:
            raise ValueError("period_start_date must not be after period_end_date")
        return self


class WaterRecordCreate(_PeriodRecord):
    model_config = {"extra": "forbid"}

    source_type: WaterSource = Field(..., description="Enum value or free-text source label")
    source_name: str | None = Field(default=None, max_length=255)
    withdrawal_m3: float | None = Field(default=None, ge=0)
    consumption_m3: float | None = Field(default=None, ge=0)
    discharge_m3: float | None = Field(default=None, ge=0)
    total_dissolved_solids_mg_l: float | None = Field(default=None, ge=0)
    water_quality: str | None = Field(default=None, max_length=100)
    is_water_stressed_area: bool = False
    reuse_application: ReuseApplication | None = None
    notes: str | None = None

    @field_validator("source_type", mode="before")
    @classmethod
    def classify_source(cls, value: Any) -> Any:
        if isinstance(value, str):
            return WaterSource.from_label(value)
        return value

    @model_validator(mode="after")
    def classify_reuse(self) -> "WaterRecordCreate":
        if self.source_type is WaterSource.REUSE and self.reuse_application is None:
            self.reuse_application = ReuseApplication.from_labels(self.source_name, self.notes)
        return self


class EnergyRecordCreate(_PeriodRecord):
    model_config = {"extra": "forbid"}

    source_name: str = Field(..., min_length=1, max_length=255)
    category: EnergyCategory = Field(..., description="Enum value or free-text category label")
    quantity: float | None = Field(default=None, ge=0)
    unit: str = Field(default="kWh", min_length=1, max_length=32)
    is_renewable: bool | None = Field(
        default=None,
        description="Derived from the source name when omitted",
    )

    @field_validator("category", mode="before")
    @classmethod
    def classify_category(cls, value: Any) -> Any:
        if isinstance(value, str):
            return EnergyCategory.from_label(value)
        return value

    @model_validator(mode="after")
    def classify_renewable(self) -> "EnergyRecordCreate":
        if self.is_renewable is None:
            self.is_renewable = is_renewable_energy_source(self.source_name, self.category)
        return self


class SafetyIncidentCreate(BaseModel):
    model_config = {"extra": "forbid"}

    incident_date: date
    incident_type: IncidentType = Field(..., description="Enum value or free-text type label")
    severity: str | None = Field(default=None, max_length=32)
    days_lost: int | None = Field(default=None, ge=0)
    employee_id: UUID | None = None
    description: str | None = None

    @field_validator("incident_type", mode="before")
    @classmethod
    def classify_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return IncidentType.from_label(value)
        return value


class RevenueRecordCreate(_PeriodRecord):
    model_config = {"extra": "forbid"}

    product_line: str | None = Field(default=None, max_length=255)
    amount: float | None = Field(default=None, ge=0)
    sustainability_category: RevenueSustainabilityCategory = RevenueSustainabilityCategory.NONE

    @field_validator("sustainability_category", mode="before")
    @classmethod
    def classify_category(cls, value: Any) -> Any:
        if isinstance(value, str):
            return RevenueSustainabilityCategory.from_label(value)
        return value


class RecordCreatedResponse(BaseModel):
    id: UUID
    company_id: UUID
    record_type: str
    created_at: datetime
    classification: dict[str, Any] = Field(
        default_factory=dict,
        description="Enum values assigned at entry",
    )
