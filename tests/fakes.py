"""
In-memory stand-ins for the repositories and the session.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.exc import OperationalError

from app.domain.metric_outcome import DateWindow
from calculators.records import ESGScoreInputs
from db.repositories.errors import CompanyInactiveError, CompanyNotFoundError


class FakeRepository:
    """
    In-memory stand-in for MetricRecordRepository.

    Row lists are keyed by window so previous-period reads can be asserted.
    """

    def __init__(self, **data: Any) -> None:
        self.data = data
        self.calls: list[tuple[str, Any]] = []
        self.fail_on: str | None = None
        self.missing = False
        self.inactive = False

    def _read(self, name: str, window: DateWindow | None = None, default: Any = None) -> Any:
        self.calls.append((name, window))
        if self.fail_on == name:
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))
        value = self.data.get(name, default)
        if isinstance(value, dict) and window is not None:
            return value.get(window, default)
        return value

    def ensure_company_exists(self, company_id: uuid.UUID, *, active_only: bool = True) -> None:
        if self.missing:
            raise CompanyNotFoundError(f"Company {company_id} does not exist")
        if self.inactive:
            raise CompanyInactiveError(f"Company {company_id} is inactive")

    def esg_score_inputs(self, company_id, window):
        return self._read("esg_score_inputs", window, default=ESGScoreInputs())

    def economic_row(self, company_id, window):
        return self._read("economic_row", window)

    def social_project_investment(self, company_id, window):
        return self._read("social_project_investment", default=0.0)

    def water_rows(self, company_id, window):
        return self._read("water_rows", window, default=[])

    def energy_rows(self, company_id, window):
        return self._read("energy_rows", window, default=[])

    def operational_rows(self, company_id, window):
        return self._read("operational_rows", window, default=[])

    def incident_rows(self, company_id, window):
        return self._read("incident_rows", window, default=[])

    def revenue_rows(self, company_id, window):
        return self._read("revenue_rows", window, default=[])

    def active_employee_rows(self, company_id):
        return self._read("active_employee_rows", default=[])

    def completed_training_rows(self, company_id, window):
        return self._read("completed_training_rows", window, default=[])


class FakeSession:
    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


class FakePreferencesRepository:
    def __init__(self, record: Any = None, *, fail: bool = False) -> None:
        self.session = FakeSession()
        self.record = record
        self.fail = fail
        self.upserts: list[dict[str, Any]] = []

    def get(self, user_id: str) -> Any:
        return self.record

    def upsert(self, **kwargs: Any) -> None:
        if self.fail:
            raise OperationalError("INSERT", {}, Exception("disk full"))
        self.upserts.append(kwargs)
