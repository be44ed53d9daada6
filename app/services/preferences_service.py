"""
app/services/preferences_service.py

Per-user UI state: onboarding tour progress and accessibility settings.

``UserPreferences`` is hydrated from the store when constructed and flushed
back (upsert + commit) after every change, so a request never holds state
that the store does not also hold.
"""

from __future__ import annotations

import copy
import logging
import uuid
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from db.repositories.errors import RecordPersistenceError
from db.repositories.preferences_repository import PreferencesRepository

logger = logging.getLogger(__name__)

DEFAULT_TOUR_STATE: dict[str, Any] = {
    "completed_tours": [],
    "active_tour": None,
    "current_step": 0,
    "dismissed": False,
}

DEFAULT_ACCESSIBILITY: dict[str, Any] = {
    "font_scale": 1.0,
    "high_contrast": False,
    "reduce_motion": False,
    "screen_reader_hints": False,
}


class UserPreferences:
    """
    Explicit state object for one user's tour and accessibility settings.

    Unknown keys coming from the store are dropped on hydration; missing
    keys take their defaults.
    """

    def __init__(self, user_id: str, repository: PreferencesRepository) -> None:
        self.user_id = user_id
        self._repository = repository

        record = repository.get(user_id)
        self.company_id: uuid.UUID | None = record.company_id if record else None
        self._tour_state = _merge(DEFAULT_TOUR_STATE, record.tour_state if record else None)
        self._accessibility = _merge(DEFAULT_ACCESSIBILITY, record.accessibility if record else None)
        self.persisted = record is not None

    @property
    def tour_state(self) -> dict[str, Any]:
        return copy.deepcopy(self._tour_state)

    @property
    def accessibility(self) -> dict[str, Any]:
        return dict(self._accessibility)

    # ------------------------------------------------------------------
    # Tour
    # ------------------------------------------------------------------

    def start_tour(self, tour_id: str) -> None:
        tour_state = self.tour_state
        tour_state.update(active_tour=tour_id, current_step=0, dismissed=False)
        self._flush(tour_state=tour_state)

    def advance_tour(self, step: int) -> None:
        tour_state = self.tour_state
        tour_state["current_step"] = max(0, step)
        self._flush(tour_state=tour_state)

    def complete_tour(self, tour_id: str) -> None:
        tour_state = self.tour_state
        if tour_id not in tour_state["completed_tours"]:
            tour_state["completed_tours"].append(tour_id)
        if tour_state["active_tour"] == tour_id:
            tour_state.update(active_tour=None, current_step=0)
        self._flush(tour_state=tour_state)

    def reset_tours(self) -> None:
        self._flush(tour_state=copy.deepcopy(DEFAULT_TOUR_STATE))

    # ------------------------------------------------------------------
    # Bulk update
    # ------------------------------------------------------------------

    def update(
        self,
        *,
        company_id: uuid.UUID | None = None,
        tour_state: dict[str, Any] | None = None,
        accessibility: dict[str, Any] | None = None,
    ) -> None:
        """Merge the given documents into the current state and flush once."""
        self._flush(
            company_id=company_id,
            tour_state=_merge(self._tour_state, tour_state) if tour_state else None,
            accessibility=_merge(self._accessibility, accessibility) if accessibility else None,
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "company_id": self.company_id,
            "tour_state": self.tour_state,
            "accessibility": self.accessibility,
        }

    def _flush(
        self,
        *,
        company_id: uuid.UUID | None = None,
        tour_state: dict[str, Any] | None = None,
        accessibility: dict[str, Any] | None = None,
    ) -> None:
        """
        Write the next state and adopt it only once the commit succeeded.

        Omitted arguments keep the current value. On failure the session is
        rolled back and the object keeps its previous state.
        """
        next_company_id = company_id if company_id is not None else self.company_id
        next_tour_state = tour_state if tour_state is not None else self._tour_state
        next_accessibility = accessibility if accessibility is not None else self._accessibility

        session = self._repository.session
        try:
            self._repository.upsert(
                user_id=self.user_id,
                company_id=next_company_id,
                tour_state=next_tour_state,
                accessibility=next_accessibility,
            )
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Preferences flush failed user_id=%s: %s", self.user_id, exc, exc_info=True)
            raise RecordPersistenceError(f"Failed to save preferences for user {self.user_id!r}") from exc

        self.company_id = next_company_id
        self._tour_state = next_tour_state
        self._accessibility = next_accessibility
        self.persisted = True


def _merge(base: dict[str, Any], override: dict[str, Any] | None) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if key in merged:
            merged[key] = copy.deepcopy(value)
    return merged
