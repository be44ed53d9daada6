"""
app/schemas/metrics.py

Response envelope shared by every metric endpoint.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from app.domain.metric_outcome import CalculationOutcome, OutcomeStatus


class DateWindowResponse(BaseModel):
    start: date
    end: date


class MetricOutcomeResponse(BaseModel):
    """
    One calculator run. ``result`` holds the zero default when ``status`` is
    ``no_data`` or ``fetch_failed``.
    """

    calculator: str
    company_id: UUID
    window: DateWindowResponse
    status: OutcomeStatus
    result: dict[str, Any] = Field(default_factory=dict)
    error: str | None = None
    computed_at: datetime

    @classmethod
    def from_outcome(cls, outcome: CalculationOutcome) -> "MetricOutcomeResponse":
        return cls(
            calculator=outcome.calculator,
            company_id=outcome.company_id,
            window=DateWindowResponse(start=outcome.window.start, end=outcome.window.end),
            status=outcome.status,
            result=outcome.result,
            error=outcome.error,
            computed_at=outcome.computed_at,
        )
