"""
tests/test_record_entry_service.py

Pytest unit tests for RecordEntryService against an in-memory session.

Coverage
--------
- Stored record is committed and refreshed
- Unknown company raises before anything is added
- Store failure while resolving the company is a RecordPersistenceError
- Store failure on commit rolls back
"""

from __future__ import annotations

import uuid
from datetime import date
from types import SimpleNamespace
from typing import Any

import pytest
from sqlalchemy.exc import OperationalError

from app.domain.categories import RevenueSustainabilityCategory
from app.schemas.records import RevenueRecordCreate
from app.services.record_entry_service import RecordEntryService
from db.repositories.errors import CompanyNotFoundError, RecordPersistenceError

COMPANY_ID = uuid.UUID("00000000-0000-0000-0000-000000000007")


class FakeEntrySession:
    def __init__(self, *, company: Any = None, fail_on: str | None = None) -> None:
        self.company = company
        self.fail_on = fail_on
        self.added: list[Any] = []
        self.commits = 0
        self.rollbacks = 0

    def _maybe_fail(self, step: str) -> None:
        if self.fail_on == step:
            raise OperationalError(step, {}, Exception("server closed the connection"))

    def get(self, model: Any, ident: Any) -> Any:
        self._maybe_fail("get")
        return self.company

    def add(self, obj: Any) -> None:
        self.added.append(obj)

    def commit(self) -> None:
        self._maybe_fail("commit")
        self.commits += 1

    def refresh(self, obj: Any) -> None:
        obj.id = uuid.uuid4()

    def rollback(self) -> None:
        self.rollbacks += 1


def _revenue() -> RevenueRecordCreate:
    return RevenueRecordCreate(
        amount=120.0,
        sustainability_category="Energia solar",
        period_start_date=date(2025, 1, 1),
        period_end_date=date(2025, 1, 31),
    )


_ACTIVE = SimpleNamespace(is_active=True)


class TestRecordEntryService:
    def test_record_is_committed(self) -> None:
        session = FakeEntrySession(company=_ACTIVE)
        record = RecordEntryService(session).add_revenue_record(COMPANY_ID, _revenue())
        assert session.commits == 1
        assert session.added == [record]
        assert record.company_id == COMPANY_ID
        assert record.sustainability_category is RevenueSustainabilityCategory.RENEWABLE_ENERGY
        assert record.id is not None

    def test_unknown_company(self) -> None:
        session = FakeEntrySession(company=None)
        with pytest.raises(CompanyNotFoundError):
            RecordEntryService(session).add_revenue_record(COMPANY_ID, _revenue())
        assert session.added == []
        assert session.commits == 0

    def test_company_lookup_failure_is_persistence_error(self) -> None:
        session = FakeEntrySession(company=_ACTIVE, fail_on="get")
        with pytest.raises(RecordPersistenceError):
            RecordEntryService(session).add_revenue_record(COMPANY_ID, _revenue())
        assert session.rollbacks == 1
        assert session.added == []

    def test_commit_failure_rolls_back(self) -> None:
        session = FakeEntrySession(company=_ACTIVE, fail_on="commit")
        with pytest.raises(RecordPersistenceError):
            RecordEntryService(session).add_revenue_record(COMPANY_ID, _revenue())
        assert session.rollbacks == 1
        assert session.commits == 0
