"""
db/repositories/metric_record_repository.py

Tenant-scoped reads of metric records, mapped to calculator row shapes.

Every query filters on ``company_id``. Period-based families (water,
energy, operational metrics, economic data, revenue) are included when
their reporting period lies entirely inside the window; dated families
(incidents, trainings, social projects) when their date falls inside it.

The caller controls commit/rollback; this repository never commits on its
own. ``SQLAlchemyError`` propagates unchanged.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import Date, cast, func, select
from sqlalchemy.orm import Session

from app.domain.categories import (
    ACTIVE_LICENSE_STATUSES,
    ACTIVE_STATUSES,
    COMPLETED_STATUSES,
    CRITICAL_SEVERITIES,
    EXPIRED_LICENSE_STATUSES,
)
from app.domain.metric_outcome import DateWindow
from calculators.records import (
    EconomicRow,
    EmployeeRow,
    EnergyRow,
    ESGScoreInputs,
    IncidentRow,
    OperationalRow,
    RevenueRow,
    TrainingRow,
    WaterRow,
)
from db.models.company import Company
from db.models.economic import EconomicData, RevenueRecord
from db.models.environmental import (
    EmissionSource,
    EnergyConsumptionRecord,
    Goal,
    License,
    OperationalMetric,
    WaterConsumptionRecord,
)
from db.models.governance import Audit, CorporatePolicy, ESGRisk, NonConformity
from db.models.social import Employee, EmployeeTraining, SafetyIncident, SocialProject
from db.repositories.errors import CompanyInactiveError, CompanyNotFoundError

_POLICY_ACTIVE_STATUSES = ACTIVE_STATUSES | ACTIVE_LICENSE_STATUSES


def _status_in(column: Any, vocabulary: frozenset[str]) -> Any:
    return func.lower(func.trim(column)).in_(sorted(vocabulary))


def _dated_in(column: Any, window: DateWindow) -> Any:
    return column.between(window.start, window.end)


class MetricRecordRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Tenant
    # ------------------------------------------------------------------

    def ensure_company_exists(self, company_id: uuid.UUID, *, active_only: bool = True) -> Company:
        company = self._session.get(Company, company_id)
        if company is None:
            raise CompanyNotFoundError(f"Company not found: {company_id}")
        if active_only and not company.is_active:
            raise CompanyInactiveError(f"Company is inactive: {company_id}")
        return company

    # ------------------------------------------------------------------
    # Environmental
    # ------------------------------------------------------------------

    def water_rows(self, company_id: uuid.UUID, window: DateWindow) -> list[WaterRow]:
        stmt = (
            select(WaterConsumptionRecord)
            .where(
                WaterConsumptionRecord.company_id == company_id,
                WaterConsumptionRecord.period_start_date >= window.start,
                WaterConsumptionRecord.period_end_date <= window.end,
            )
            .order_by(WaterConsumptionRecord.period_start_date, WaterConsumptionRecord.id)
        )
        return [
            WaterRow(
                source_type=record.source_type,
                period_start=record.period_start_date,
                period_end=record.period_end_date,
                withdrawal_m3=record.withdrawal_m3,
                consumption_m3=record.consumption_m3,
                discharge_m3=record.discharge_m3,
                total_dissolved_solids_mg_l=record.total_dissolved_solids_mg_l,
                is_water_stressed_area=record.is_water_stressed_area,
                source_name=record.source_name,
                water_quality=record.water_quality,
                reuse_application=record.reuse_application,
            )
            for record in self._session.scalars(stmt)
        ]

    def energy_rows(self, company_id: uuid.UUID, window: DateWindow) -> list[EnergyRow]:
        stmt = (
            select(EnergyConsumptionRecord)
            .where(
                EnergyConsumptionRecord.company_id == company_id,
                EnergyConsumptionRecord.period_start_date >= window.start,
                EnergyConsumptionRecord.period_end_date <= window.end,
            )
            .order_by(EnergyConsumptionRecord.period_start_date, EnergyConsumptionRecord.id)
        )
        return [
            EnergyRow(
                source_name=record.source_name,
                category=record.category,
                quantity=record.quantity,
                unit=record.unit,
                is_renewable=record.is_renewable,
            )
            for record in self._session.scalars(stmt)
        ]

    def operational_rows(self, company_id: uuid.UUID, window: DateWindow) -> list[OperationalRow]:
        stmt = (
            select(OperationalMetric)
            .where(
                OperationalMetric.company_id == company_id,
                OperationalMetric.period_start_date >= window.start,
                OperationalMetric.period_end_date <= window.end,
            )
            .order_by(OperationalMetric.period_start_date, OperationalMetric.id)
        )
        return [
            OperationalRow(
                production_volume=record.production_volume,
                production_unit=record.production_unit,
                revenue_brl=record.revenue_brl,
                hours_worked=record.hours_worked,
            )
            for record in self._session.scalars(stmt)
        ]

    # ------------------------------------------------------------------
    # Social
    # ------------------------------------------------------------------

    def incident_rows(self, company_id: uuid.UUID, window: DateWindow) -> list[IncidentRow]:
        stmt = (
            select(SafetyIncident)
            .where(
                SafetyIncident.company_id == company_id,
                SafetyIncident.incident_date >= window.start,
                SafetyIncident.incident_date <= window.end,
            )
            .order_by(SafetyIncident.incident_date, SafetyIncident.id)
        )
        return [
            IncidentRow(
                incident_date=record.incident_date,
                incident_type=record.incident_type,
                severity=record.severity,
                days_lost=record.days_lost,
            )
            for record in self._session.scalars(stmt)
        ]

    def active_employee_rows(self, company_id: uuid.UUID) -> list[EmployeeRow]:
        stmt = (
            select(Employee)
            .where(
                Employee.company_id == company_id,
                _status_in(Employee.status, ACTIVE_STATUSES),
            )
            .order_by(Employee.id)
        )
        return [
            EmployeeRow(
                id=str(record.id),
                gender=record.gender,
                department=record.department,
                position=record.position,
                name=record.full_name,
                hire_date=record.hire_date,
            )
            for record in self._session.scalars(stmt)
        ]

    def completed_training_rows(self, company_id: uuid.UUID, window: DateWindow) -> list[TrainingRow]:
        stmt = (
            select(EmployeeTraining)
            .where(
                EmployeeTraining.company_id == company_id,
                _status_in(EmployeeTraining.status, COMPLETED_STATUSES),
                EmployeeTraining.completion_date >= window.start,
                EmployeeTraining.completion_date <= window.end,
            )
            .order_by(EmployeeTraining.completion_date, EmployeeTraining.id)
        )
        return [
            TrainingRow(
                employee_id=str(record.employee_id),
                completion_date=record.completion_date,
                duration_hours=record.duration_hours,
                category=record.category,
                is_mandatory=record.is_mandatory,
            )
            for record in self._session.scalars(stmt)
        ]

    def social_project_investment(self, company_id: uuid.UUID, window: DateWindow) -> float:
        """Sum of ``invested_amount`` for projects starting inside *window*."""
        stmt = select(func.coalesce(func.sum(SocialProject.invested_amount), 0.0)).where(
            SocialProject.company_id == company_id,
            SocialProject.start_date >= window.start,
            SocialProject.start_date <= window.end,
        )
        return float(self._session.scalar(stmt) or 0.0)

    # ------------------------------------------------------------------
    # Economic
    # ------------------------------------------------------------------

    def economic_row(self, company_id: uuid.UUID, window: DateWindow) -> EconomicRow | None:
        """Latest economic snapshot whose period lies inside *window*, or ``None``."""
        stmt = (
            select(EconomicData)
            .where(
                EconomicData.company_id == company_id,
                EconomicData.period_start_date >= window.start,
                EconomicData.period_end_date <= window.end,
            )
            .order_by(EconomicData.period_end_date.desc(), EconomicData.created_at.desc())
            .limit(1)
        )
        record = self._session.scalars(stmt).first()
        if record is None:
            return None
        return EconomicRow(
            revenue=record.revenue,
            financial_income=record.financial_income,
            asset_sales=record.asset_sales,
            operational_costs=record.operational_costs,
            employee_wages=record.employee_wages,
            employee_benefits=record.employee_benefits,
            interest_payments=record.interest_payments,
            dividends=record.dividends,
            taxes=record.taxes,
            community_investments=record.community_investments,
        )

    def revenue_rows(self, company_id: uuid.UUID, window: DateWindow) -> list[RevenueRow]:
        stmt = (
            select(RevenueRecord)
            .where(
                RevenueRecord.company_id == company_id,
                RevenueRecord.period_start_date >= window.start,
                RevenueRecord.period_end_date <= window.end,
            )
            .order_by(RevenueRecord.period_start_date, RevenueRecord.id)
        )
        return [
            RevenueRow(
                amount=record.amount,
                category=record.sustainability_category,
                product_line=record.product_line,
            )
            for record in self._session.scalars(stmt)
        ]

    # ------------------------------------------------------------------
    # ESG score
    # ------------------------------------------------------------------

    def esg_score_inputs(self, company_id: uuid.UUID, window: DateWindow) -> ESGScoreInputs:
        """
        Count every record family that feeds the pillar heuristics.

        Incidents, trainings, non-conformities and audits are counted only
        when their date falls inside *window* (rows without a business date
        fall back to their creation date). The ``*_records`` totals ignore
        status so that a pillar with only closed or draft rows still has data.
        """
        incidents_in_window = _dated_in(SafetyIncident.incident_date, window)
        trainings_in_window = _dated_in(
            func.coalesce(EmployeeTraining.completion_date, cast(EmployeeTraining.created_at, Date)),
            window,
        )
        non_conformities_in_window = _dated_in(
            func.coalesce(NonConformity.detected_date, cast(NonConformity.created_at, Date)),
            window,
        )
        audits_in_window = _dated_in(
            func.coalesce(Audit.end_date, Audit.start_date, cast(Audit.created_at, Date)),
            window,
        )

        return ESGScoreInputs(
            emission_sources=self._count(EmissionSource, company_id),
            active_licenses=self._count(
                License, company_id, _status_in(License.status, ACTIVE_LICENSE_STATUSES)
            ),
            expired_licenses=self._count(
                License, company_id, _status_in(License.status, EXPIRED_LICENSE_STATUSES)
            ),
            goals=self._count(Goal, company_id),
            average_goal_progress=self._average_goal_progress(company_id),
            environmental_records=(
                self._count(EmissionSource, company_id)
                + self._count(License, company_id)
                + self._count(Goal, company_id)
            ),
            employees=self._count(Employee, company_id, _status_in(Employee.status, ACTIVE_STATUSES)),
            completed_trainings=self._count(
                EmployeeTraining,
                company_id,
                _status_in(EmployeeTraining.status, COMPLETED_STATUSES),
                trainings_in_window,
            ),
            incidents=self._count(SafetyIncident, company_id, incidents_in_window),
            critical_incidents=self._count(
                SafetyIncident,
                company_id,
                incidents_in_window,
                _status_in(SafetyIncident.severity, CRITICAL_SEVERITIES),
            ),
            active_social_projects=self._count(
                SocialProject, company_id, _status_in(SocialProject.status, ACTIVE_STATUSES)
            ),
            social_records=(
                self._count(Employee, company_id)
                + self._count(EmployeeTraining, company_id, trainings_in_window)
                + self._count(SafetyIncident, company_id, incidents_in_window)
                + self._count(SocialProject, company_id)
            ),
            risks=self._count(ESGRisk, company_id),
            critical_risks=self._count(
                ESGRisk, company_id, _status_in(ESGRisk.inherent_risk_level, CRITICAL_SEVERITIES)
            ),
            open_non_conformities=self._count(
                NonConformity,
                company_id,
                non_conformities_in_window,
                func.coalesce(
                    ~_status_in(NonConformity.status, COMPLETED_STATUSES),
                    True,
                ),
            ),
            active_policies=self._count(
                CorporatePolicy,
                company_id,
                _status_in(CorporatePolicy.status, _POLICY_ACTIVE_STATUSES),
            ),
            completed_audits=self._count(
                Audit, company_id, audits_in_window, _status_in(Audit.status, COMPLETED_STATUSES)
            ),
            governance_records=(
                self._count(ESGRisk, company_id)
                + self._count(NonConformity, company_id, non_conformities_in_window)
                + self._count(CorporatePolicy, company_id)
                + self._count(Audit, company_id, audits_in_window)
            ),
        )

    def _count(self, model: Any, company_id: uuid.UUID, *criteria: Any) -> int:
        stmt = select(func.count()).select_from(model).where(model.company_id == company_id, *criteria)
        return int(self._session.scalar(stmt) or 0)

    def _average_goal_progress(self, company_id: uuid.UUID) -> float:
        stmt = select(func.avg(Goal.progress_percentage)).where(Goal.company_id == company_id)
        return float(self._session.scalar(stmt) or 0.0)
