"""
calculators/records.py

Plain, read-only row shapes consumed by the calculators.

Repositories map ORM rows into these before any arithmetic happens, so the
calculators never touch a session and can be exercised with literals.
Numeric fields are Optional because the store allows NULLs; calculators
coalesce them to zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from app.domain.categories import (
    EnergyCategory,
    IncidentType,
    ReuseApplication,
    RevenueSustainabilityCategory,
    WaterSource,
)


# ---------------------------------------------------------------------------
# Environmental
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WaterRow:
    source_type: WaterSource
    period_start: date
    period_end: date
    withdrawal_m3: float | None = None
    consumption_m3: float | None = None
    discharge_m3: float | None = None
    total_dissolved_solids_mg_l: float | None = None
    is_water_stressed_area: bool = False
    source_name: str | None = None
    water_quality: str | None = None
    reuse_application: ReuseApplication | None = None


@dataclass(frozen=True)
class EnergyRow:
    source_name: str
    category: EnergyCategory
    quantity: float | None
    unit: str
    is_renewable: bool = False


@dataclass(frozen=True)
class OperationalRow:
    production_volume: float | None = None
    production_unit: str | None = None
    revenue_brl: float | None = None
    hours_worked: float | None = None


# ---------------------------------------------------------------------------
# Social
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IncidentRow:
    incident_date: date
    incident_type: IncidentType
    severity: str | None = None
    days_lost: int | None = None


@dataclass(frozen=True)
class EmployeeRow:
    id: str
    gender: str | None = None
    department: str | None = None
    position: str | None = None
    name: str | None = None
    hire_date: date | None = None


@dataclass(frozen=True)
class TrainingRow:
    employee_id: str
    completion_date: date
    duration_hours: float | None = None
    category: str | None = None
    is_mandatory: bool = False


# ---------------------------------------------------------------------------
# Economic
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EconomicRow:
    """One GRI 201-1 snapshot. ``None`` means the field was never filled."""

    revenue: float | None = None
    financial_income: float | None = None
    asset_sales: float | None = None
    operational_costs: float | None = None
    employee_wages: float | None = None
    employee_benefits: float | None = None
    interest_payments: float | None = None
    dividends: float | None = None
    taxes: float | None = None
    community_investments: float | None = None


@dataclass(frozen=True)
class RevenueRow:
    amount: float | None
    category: RevenueSustainabilityCategory
    product_line: str | None = None


# ---------------------------------------------------------------------------
# ESG score
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ESGScoreInputs:
    """
    Record counts that drive the pillar heuristics.

    Every field is a count (or an average progress percentage) computed by
    the repository for one tenant and one window. The ``*_records`` fields
    count every row of the pillar regardless of status and only decide
    whether the pillar has data.
    """

    # environmental
    emission_sources: int = 0
    active_licenses: int = 0
    expired_licenses: int = 0
    goals: int = 0
    average_goal_progress: float = 0.0
    environmental_records: int = 0
    # social
    employees: int = 0
    completed_trainings: int = 0
    incidents: int = 0
    critical_incidents: int = 0
    active_social_projects: int = 0
    social_records: int = 0
    # governance
    risks: int = 0
    critical_risks: int = 0
    open_non_conformities: int = 0
    active_policies: int = 0
    completed_audits: int = 0
    governance_records: int = 0
