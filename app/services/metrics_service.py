"""
app/services/metrics_service.py

ESG metric orchestrator.

Wires MetricRecordRepository → calculator into one read-only run per
request. No business logic lives here; every layer keeps its own
responsibility:

    MetricRecordRepository  : tenant-scoped SQL reads, row mapping
    Calculator              : deterministic reduction (calculators/*)
    ESGMetricsService       : window handling, outcome status, logging

Failure contract
----------------
- Unknown company          → raises CompanyNotFoundError (router maps to 404)
- start > end              → raises InvalidWindowError  (router maps to 422)
- Store failure            → ``fetch_failed`` outcome carrying the
                             calculator's zero default and the error text
- Nothing to aggregate     → ``no_data`` outcome carrying the zero default

The previous window used by comparison blocks is the immediately preceding
window of equal length (``DateWindow.previous``); year-based calculators
compare against the previous calendar year.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import MetricsSettings, get_metrics_settings
from app.domain.metric_outcome import CalculationOutcome, DateWindow, OutcomeStatus
from app.logging_utils import elapsed_ms, log_event
from calculators.base import BaseMetricCalculator
from calculators.common import sum_hours_worked
from calculators.economic_value import EconomicValueDistributionCalculator
from calculators.energy import EnergyConsumptionCalculator, to_kwh
from calculators.esg_score import ESGScoreCalculator
from calculators.lost_time_accidents import LostTimeAccidentsCalculator
from calculators.records import ESGScoreInputs
from calculators.sustainable_revenue import SustainableRevenueCalculator
from calculators.training_hours import TrainingHoursCalculator
from calculators.water import (
    WaterConsumptionCalculator,
    WaterIntensityCalculator,
    WaterReuseCalculator,
)
from db.repositories.metric_record_repository import MetricRecordRepository

logger = logging.getLogger(__name__)

# Returns the calculator's keyword inputs, or None when there is nothing to aggregate.
_Fetch = Callable[[], "dict[str, Any] | None"]


class MetricFetchError(RuntimeError):
    """
    Raised when the repository cannot read a calculator's inputs.

    Never escapes the service: it is converted into a ``fetch_failed``
    outcome.
    """


class ESGMetricsService:
    """
    Runs one calculator per call for one company and one window.

    The service is stateless with respect to business data; the repository
    is bound to a request-scoped session.
    """

    def __init__(
        self,
        repository: MetricRecordRepository,
        settings: MetricsSettings | None = None,
    ) -> None:
        self._repository = repository
        self._settings = settings or get_metrics_settings()

        self._esg_score = ESGScoreCalculator()
        self._economic_value = EconomicValueDistributionCalculator()
        self._water = WaterConsumptionCalculator(self._settings.freshwater_tds_mg_l)
        self._water_intensity = WaterIntensityCalculator()
        self._water_reuse = WaterReuseCalculator(self._water)
        self._energy = EnergyConsumptionCalculator()
        self._lost_time = LostTimeAccidentsCalculator()
        self._sustainable_revenue = SustainableRevenueCalculator()
        self._training_hours = TrainingHoursCalculator(self._settings.training_benchmark_hours)

    @classmethod
    def from_session(cls, db: Session) -> "ESGMetricsService":
        return cls(MetricRecordRepository(db))

    def default_window(self) -> DateWindow:
        return DateWindow.trailing_days(self._settings.default_window_days)

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    def esg_score(self, company_id: uuid.UUID, window: DateWindow | None = None) -> CalculationOutcome:
        """
        ESG pillar scores for *window* (the trailing default window when omitted).

        Dated families (incidents, trainings, non-conformities, audits) are
        counted inside the window; registers without a reporting date
        (licenses, goals, policies, risks, employees) are counted as held.
        """
        window = window or self.default_window()

        def fetch() -> dict[str, Any] | None:
            inputs = self._repository.esg_score_inputs(company_id, window)
            if inputs == ESGScoreInputs():
                return None
            return {"inputs": inputs}

        return self._run(self._esg_score, company_id, window, fetch)

    def economic_value(self, company_id: uuid.UUID, window: DateWindow) -> CalculationOutcome:
        def fetch() -> dict[str, Any] | None:
            current = self._repository.economic_row(company_id, window)
            if current is None:
                return None
            social_investment = 0.0
            if current.community_investments is None:
                social_investment = self._repository.social_project_investment(company_id, window)
            return {
                "current": current,
                "social_project_investment": social_investment,
                "previous": self._read_previous(self._repository.economic_row, company_id, window),
            }

        return self._run(self._economic_value, company_id, window, fetch)

    def water(self, company_id: uuid.UUID, year: int) -> CalculationOutcome:
        window = DateWindow.for_year(year)

        def fetch() -> dict[str, Any] | None:
            rows = self._repository.water_rows(company_id, window)
            return {"rows": rows} if rows else None

        return self._run(self._water, company_id, window, fetch)

    def water_intensity(self, company_id: uuid.UUID, year: int) -> CalculationOutcome:
        window = DateWindow.for_year(year)
        previous_window = DateWindow.for_year(year - 1)

        def fetch() -> dict[str, Any] | None:
            rows = self._repository.water_rows(company_id, window)
            if not rows:
                return None
            previous_rows = self._repository.water_rows(company_id, previous_window)
            previous_consumption = None
            if previous_rows:
                previous_consumption = self._water.calculate(rows=previous_rows)["total_consumption_m3"]
            return {
                "consumption_m3": self._water.calculate(rows=rows)["total_consumption_m3"],
                "operational": self._repository.operational_rows(company_id, window),
                "previous_consumption_m3": previous_consumption,
                "previous_operational": self._repository.operational_rows(company_id, previous_window),
            }

        return self._run(self._water_intensity, company_id, window, fetch)

    def water_reuse(self, company_id: uuid.UUID, year: int) -> CalculationOutcome:
        window = DateWindow.for_year(year)

        def fetch() -> dict[str, Any] | None:
            rows = self._repository.water_rows(company_id, window)
            if not rows:
                return None
            return {
                "rows": rows,
                "previous_rows": self._repository.water_rows(company_id, DateWindow.for_year(year - 1)),
            }

        return self._run(self._water_reuse, company_id, window, fetch)

    def energy(self, company_id: uuid.UUID, year: int) -> CalculationOutcome:
        window = DateWindow.for_year(year)

        def fetch() -> dict[str, Any] | None:
            rows = self._repository.energy_rows(company_id, window)
            if not rows:
                return None
            previous_rows = self._repository.energy_rows(company_id, DateWindow.for_year(year - 1))
            return {
                "rows": rows,
                "operational": self._repository.operational_rows(company_id, window),
                "previous_total_kwh": sum(to_kwh(row) for row in previous_rows) if previous_rows else None,
            }

        return self._run(self._energy, company_id, window, fetch)

    def lost_time_accidents(self, company_id: uuid.UUID, window: DateWindow) -> CalculationOutcome:
        def fetch() -> dict[str, Any] | None:
            incidents = self._repository.incident_rows(company_id, window)
            hours_worked = sum_hours_worked(self._repository.operational_rows(company_id, window))
            if not incidents and hours_worked is None:
                return None
            previous = self._read_previous(self._repository.incident_rows, company_id, window)
            return {
                "incidents": incidents,
                "hours_worked": hours_worked,
                "previous_incidents": previous or None,
            }

        return self._run(self._lost_time, company_id, window, fetch)

    def sustainable_revenue(self, company_id: uuid.UUID, window: DateWindow) -> CalculationOutcome:
        def fetch() -> dict[str, Any] | None:
            rows = self._repository.revenue_rows(company_id, window)
            if not rows:
                return None
            previous = self._read_previous(self._repository.revenue_rows, company_id, window)
            return {"rows": rows, "previous_rows": previous or None}

        return self._run(self._sustainable_revenue, company_id, window, fetch)

    def training_hours(self, company_id: uuid.UUID, window: DateWindow) -> CalculationOutcome:
        def fetch() -> dict[str, Any] | None:
            employees = self._repository.active_employee_rows(company_id)
            if not employees:
                return None
            previous = self._read_previous(self._repository.completed_training_rows, company_id, window)
            return {
                "employees": employees,
                "trainings": self._repository.completed_training_rows(company_id, window),
                "previous_trainings": previous or None,
            }

        return self._run(self._training_hours, company_id, window, fetch)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _read_previous(
        read: Callable[[uuid.UUID, DateWindow], Any],
        company_id: uuid.UUID,
        window: DateWindow,
    ) -> Any:
        """Read the preceding window of equal length; ``None`` when it does not exist."""
        previous = window.previous()
        if previous is None:
            return None
        return read(company_id, previous)

    def _run(
        self,
        calculator: BaseMetricCalculator,
        company_id: uuid.UUID,
        window: DateWindow,
        fetch: _Fetch,
    ) -> CalculationOutcome:
        started = time.monotonic()
        try:
            inputs = self._fetch(calculator, company_id, window, fetch)
        except MetricFetchError as exc:
            outcome = CalculationOutcome(
                calculator=calculator.name,
                company_id=company_id,
                window=window,
                status=OutcomeStatus.FETCH_FAILED,
                result=calculator.empty(),
                error=str(exc),
            )
        else:
            if inputs is None:
                outcome = CalculationOutcome(
                    calculator=calculator.name,
                    company_id=company_id,
                    window=window,
                    status=OutcomeStatus.NO_DATA,
                    result=calculator.empty(),
                )
            else:
                outcome = CalculationOutcome(
                    calculator=calculator.name,
                    company_id=company_id,
                    window=window,
                    status=OutcomeStatus.OK,
                    result=calculator.calculate(**inputs),
                )

        log_event(
            logger,
            logging.WARNING if outcome.status is OutcomeStatus.FETCH_FAILED else logging.INFO,
            "metric_calculated",
            calculator=calculator.name,
            company_id=company_id,
            window=window,
            status=outcome.status,
            elapsed_ms=elapsed_ms(started),
        )
        return outcome

    def _fetch(
        self,
        calculator: BaseMetricCalculator,
        company_id: uuid.UUID,
        window: DateWindow,
        fetch: _Fetch,
    ) -> dict[str, Any] | None:
        """
        Resolve the company and read the calculator's inputs.

        Raises
        ------
        CompanyNotFoundError
            Propagated unchanged from the repository.
        MetricFetchError
            Wraps any ``SQLAlchemyError`` raised while reading.
        """
        try:
            self._repository.ensure_company_exists(company_id)
            return fetch()
        except SQLAlchemyError as exc:
            logger.error(
                "_fetch failed calculator=%s company_id=%s window=[%s, %s]: %s",
                calculator.name,
                company_id,
                window.start.isoformat(),
                window.end.isoformat(),
                exc,
                exc_info=True,
            )
            raise MetricFetchError(
                f"Failed to read {calculator.name} inputs for company_id={company_id}"
            ) from exc
