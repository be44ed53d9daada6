"""
app/api/routers/metrics_router.py

Read-only ESG metric endpoints.

Every endpoint returns the outcome envelope. ``ok`` and ``no_data`` are
200; ``fetch_failed`` is 503 with the same envelope so clients can still
render the zero default.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.api.dependencies import get_date_window, get_metrics_service, get_report_year
from app.domain.metric_outcome import CalculationOutcome, DateWindow, OutcomeStatus
from app.schemas.metrics import MetricOutcomeResponse
from app.services.metrics_service import ESGMetricsService
from db.repositories.errors import CompanyInactiveError, CompanyNotFoundError

router = APIRouter(prefix="/companies/{company_id}/metrics", tags=["metrics"])


def _respond(response: Response, run: Callable[[], CalculationOutcome]) -> MetricOutcomeResponse:
    try:
        outcome = run()
    except (CompanyNotFoundError, CompanyInactiveError) as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    if outcome.status is OutcomeStatus.FETCH_FAILED:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return MetricOutcomeResponse.from_outcome(outcome)


@router.get("/esg-score", response_model=MetricOutcomeResponse)
def get_esg_score(
    company_id: uuid.UUID,
    response: Response,
    window: DateWindow = Depends(get_date_window),
    service: ESGMetricsService = Depends(get_metrics_service),
) -> MetricOutcomeResponse:
    return _respond(response, lambda: service.esg_score(company_id, window))


@router.get("/economic-value", response_model=MetricOutcomeResponse)
def get_economic_value(
    company_id: uuid.UUID,
    response: Response,
    window: DateWindow = Depends(get_date_window),
    service: ESGMetricsService = Depends(get_metrics_service),
) -> MetricOutcomeResponse:
    """GRI 201-1 direct economic value generated and distributed."""
    return _respond(response, lambda: service.economic_value(company_id, window))


@router.get("/water", response_model=MetricOutcomeResponse)
def get_water(
    company_id: uuid.UUID,
    response: Response,
    year: int = Depends(get_report_year),
    service: ESGMetricsService = Depends(get_metrics_service),
) -> MetricOutcomeResponse:
    return _respond(response, lambda: service.water(company_id, year))


@router.get("/water/intensity", response_model=MetricOutcomeResponse)
def get_water_intensity(
    company_id: uuid.UUID,
    response: Response,
    year: int = Depends(get_report_year),
    service: ESGMetricsService = Depends(get_metrics_service),
) -> MetricOutcomeResponse:
    return _respond(response, lambda: service.water_intensity(company_id, year))


@router.get("/water/reuse", response_model=MetricOutcomeResponse)
def get_water_reuse(
    company_id: uuid.UUID,
    response: Response,
    year: int = Depends(get_report_year),
    service: ESGMetricsService = Depends(get_metrics_service),
) -> MetricOutcomeResponse:
    return _respond(response, lambda: service.water_reuse(company_id, year))


@router.get("/energy", response_model=MetricOutcomeResponse)
def get_energy(
    company_id: uuid.UUID,
    response: Response,
    year: int = Depends(get_report_year),
    service: ESGMetricsService = Depends(get_metrics_service),
) -> MetricOutcomeResponse:
    return _respond(response, lambda: service.energy(company_id, year))


@router.get("/lost-time-accidents", response_model=MetricOutcomeResponse)
def get_lost_time_accidents(
    company_id: uuid.UUID,
    response: Response,
    window: DateWindow = Depends(get_date_window),
    service: ESGMetricsService = Depends(get_metrics_service),
) -> MetricOutcomeResponse:
    return _respond(response, lambda: service.lost_time_accidents(company_id, window))


@router.get("/sustainable-revenue", response_model=MetricOutcomeResponse)
def get_sustainable_revenue(
    company_id: uuid.UUID,
    response: Response,
    window: DateWindow = Depends(get_date_window),
    service: ESGMetricsService = Depends(get_metrics_service),
) -> MetricOutcomeResponse:
    return _respond(response, lambda: service.sustainable_revenue(company_id, window))


@router.get("/training-hours", response_model=MetricOutcomeResponse)
def get_training_hours(
    company_id: uuid.UUID,
    response: Response,
    window: DateWindow = Depends(get_date_window),
    service: ESGMetricsService = Depends(get_metrics_service),
) -> MetricOutcomeResponse:
    return _respond(response, lambda: service.training_hours(company_id, window))
