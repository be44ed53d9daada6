"""
app/api/dependencies.py

Shared FastAPI dependencies: services bound to the request session and
query-parameter parsing for date windows.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from fastapi import Depends, HTTPException, Path, Query, status
from sqlalchemy.orm import Session

from app.config import get_metrics_settings
from app.domain.metric_outcome import DateWindow, InvalidWindowError
from app.services.metrics_service import ESGMetricsService
from app.services.preferences_service import UserPreferences
from app.services.record_entry_service import RecordEntryService
from db.repositories.preferences_repository import PreferencesRepository
from db.session import get_db


def get_metrics_service(db: Session = Depends(get_db)) -> ESGMetricsService:
    return ESGMetricsService.from_session(db)


def get_record_entry_service(db: Session = Depends(get_db)) -> RecordEntryService:
    return RecordEntryService(db)


def get_user_preferences(
    user_id: str = Path(..., min_length=1, max_length=128),
    db: Session = Depends(get_db),
) -> UserPreferences:
    """Hydrate the caller's preferences from the store for this request."""
    return UserPreferences(user_id, PreferencesRepository(db))


def get_date_window(
    start: date | None = Query(default=None, description="Inclusive window start (YYYY-MM-DD)"),
    end: date | None = Query(default=None, description="Inclusive window end (YYYY-MM-DD)"),
) -> DateWindow:
    """
    Build the request window.

    A missing ``end`` defaults to today; a missing ``start`` defaults to
    ``METRICS_DEFAULT_WINDOW_DAYS`` before ``end``. ``start > end`` is a 422.
    """

    window_days = get_metrics_settings().default_window_days
    resolved_end = end or datetime.now(tz=timezone.utc).date()
    resolved_start = start or resolved_end - timedelta(days=window_days - 1)
    try:
        return DateWindow(start=resolved_start, end=resolved_end)
    except InvalidWindowError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc


def get_report_year(
    year: int | None = Query(default=None, ge=1900, le=2100, description="Calendar year; defaults to the current one"),
) -> int:
    return year or datetime.now(tz=timezone.utc).year
