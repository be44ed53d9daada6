"""
db/repositories/preferences_repository.py

Persistence layer for per-user UI preferences.

The caller controls commit/rollback; this repository never commits on its
own.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from db.models.user_preferences import UserPreferencesRecord


def _now_utc() -> datetime:
    return datetime.now(tz=timezone.utc)


class PreferencesRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def get(self, user_id: str) -> UserPreferencesRecord | None:
        stmt = select(UserPreferencesRecord).where(UserPreferencesRecord.user_id == user_id)
        return self._session.scalars(stmt).first()

    def upsert(
        self,
        *,
        user_id: str,
        company_id: uuid.UUID | None,
        tour_state: dict[str, Any],
        accessibility: dict[str, Any],
    ) -> UserPreferencesRecord:
        """
        Insert or replace the preferences row for *user_id*.

        Both JSON documents are written whole; partial merges happen in the
        caller.
        """
        stmt = (
            insert(UserPreferencesRecord)
            .values(
                id=uuid.uuid4(),
                user_id=user_id,
                company_id=company_id,
                tour_state=tour_state,
                accessibility=accessibility,
            )
            .on_conflict_do_update(
                index_elements=[UserPreferencesRecord.user_id],
                set_={
                    "company_id": company_id,
                    "tour_state": tour_state,
                    "accessibility": accessibility,
                    "updated_at": _now_utc(),
                },
            )
            .returning(UserPreferencesRecord)
        )
        return self._session.scalars(stmt).one()
