"""
app/domain/metric_outcome.py

Date windows and the uniform outcome envelope returned by every calculator.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Any


class InvalidWindowError(ValueError):
    """Raised when a date window has ``start`` after ``end``."""


@dataclass(frozen=True)
class DateWindow:
    """
    Inclusive calendar window ``[start, end]`` that scopes one aggregate.
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidWindowError(
                f"Window start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    @classmethod
    def for_year(cls, year: int) -> "DateWindow":
        return cls(start=date(year, 1, 1), end=date(year, 12, 31))

    @classmethod
    def trailing_days(cls, days: int, *, today: date | None = None) -> "DateWindow":
        """Window of *days* days ending today (inclusive)."""
        end = today or datetime.now(tz=timezone.utc).date()
        return cls(start=end - timedelta(days=max(days, 1) - 1), end=end)

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def previous(self) -> "DateWindow | None":
        """
        Immediately preceding window of equal length::

            prev_end   = start - 1 day
            prev_start = prev_end - (days - 1)

        ``None`` when that window would start before ``date.min``.
        """
        if (self.start - date.min).days < self.days:
            return None
        prev_end = self.start - timedelta(days=1)
        return DateWindow(start=prev_end - timedelta(days=self.days - 1), end=prev_end)

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end

    def as_dict(self) -> dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


class OutcomeStatus(str, Enum):
    OK = "ok"
    NO_DATA = "no_data"
    FETCH_FAILED = "fetch_failed"


@dataclass(frozen=True)
class CalculationOutcome:
    """
    Result envelope shared by all calculators.

    ``result`` always holds a payload: the computed aggregate when
    ``status`` is ``ok``, and the calculator's zero default otherwise.
    ``error`` is populated only for ``fetch_failed``.
    """

    calculator: str
    company_id: uuid.UUID
    window: DateWindow
    status: OutcomeStatus
    result: dict[str, Any]
    error: str | None = None
    computed_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))

    @property
    def has_data(self) -> bool:
        return self.status is OutcomeStatus.OK

    def to_payload(self) -> dict[str, Any]:
        return {
            "calculator": self.calculator,
            "company_id": str(self.company_id),
            "window": self.window.as_dict(),
            "status": self.status.value,
            "result": self.result,
            "error": self.error,
            "computed_at": self.computed_at.isoformat(),
        }
