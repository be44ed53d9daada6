"""
app/services/record_entry_service.py

Writes classified metric records for one company.

The service owns the transaction: it adds the row, commits, and refreshes
it. Any store failure rolls the session back and is re-raised as
``RecordPersistenceError``.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.logging_utils import log_event
from app.schemas.records import (
    EnergyRecordCreate,
    RevenueRecordCreate,
    SafetyIncidentCreate,
    WaterRecordCreate,
)
from db.base import Base
from db.models.economic import RevenueRecord
from db.models.environmental import EnergyConsumptionRecord, WaterConsumptionRecord
from db.models.social import SafetyIncident
from db.repositories.errors import RecordPersistenceError
from db.repositories.metric_record_repository import MetricRecordRepository

logger = logging.getLogger(__name__)


class RecordEntryService:
    def __init__(self, db: Session) -> None:
        self._db = db
        self._records = MetricRecordRepository(db)

    def add_water_record(self, company_id: uuid.UUID, body: WaterRecordCreate) -> WaterConsumptionRecord:
        return self._persist(company_id, WaterConsumptionRecord(company_id=company_id, **body.model_dump()))

    def add_energy_record(self, company_id: uuid.UUID, body: EnergyRecordCreate) -> EnergyConsumptionRecord:
        return self._persist(company_id, EnergyConsumptionRecord(company_id=company_id, **body.model_dump()))

    def add_safety_incident(self, company_id: uuid.UUID, body: SafetyIncidentCreate) -> SafetyIncident:
        return self._persist(company_id, SafetyIncident(company_id=company_id, **body.model_dump()))

    def add_revenue_record(self, company_id: uuid.UUID, body: RevenueRecordCreate) -> RevenueRecord:
        return self._persist(company_id, RevenueRecord(company_id=company_id, **body.model_dump()))

    def _persist(self, company_id: uuid.UUID, record: Any) -> Any:
        """
        Raises
        ------
        CompanyNotFoundError
            When *company_id* does not exist.
        RecordPersistenceError
            When reading the company or writing the record fails.
        """
        table = record.__tablename__
        try:
            self._records.ensure_company_exists(company_id)
            self._db.add(record)
            self._db.commit()
            self._db.refresh(record)
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.error(
                "Record insert failed table=%s company_id=%s: %s",
                table,
                company_id,
                exc,
                exc_info=True,
            )
            raise RecordPersistenceError(f"Failed to store {table} record") from exc

        log_event(logger, logging.INFO, "record_created", table=table, company_id=company_id, record_id=record.id)
        return record


def classification_of(record: Base) -> dict[str, Any]:
    """Enum values assigned to *record* at entry, keyed by column name."""
    fields = {
        "water_consumption_records": ("source_type", "reuse_application"),
        "energy_consumption_records": ("category", "is_renewable"),
        "safety_incidents": ("incident_type",),
        "revenue_records": ("sustainability_category",),
    }.get(record.__tablename__, ())
    classified: dict[str, Any] = {}
    for name in fields:
        value = getattr(record, name)
        classified[name] = getattr(value, "value", value)
    return classified
