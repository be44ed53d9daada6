"""
app/api/routers/preferences_router.py

Onboarding tour and accessibility preferences per user.

Every write flushes to the store before responding; a store failure is a
500 and leaves the stored preferences unchanged.
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException, Path, status

from app.api.dependencies import get_user_preferences
from app.schemas.preferences import PreferencesResponse, PreferencesUpdateRequest, TourStepRequest
from app.services.preferences_service import UserPreferences
from db.repositories.errors import RecordPersistenceError

router = APIRouter(prefix="/users/{user_id}/preferences", tags=["preferences"])


def _write(preferences: UserPreferences, change: Callable[[], None]) -> PreferencesResponse:
    try:
        change()
    except RecordPersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    return PreferencesResponse.model_validate(preferences.as_dict())


@router.get("", response_model=PreferencesResponse)
def get_preferences(
    preferences: UserPreferences = Depends(get_user_preferences),
) -> PreferencesResponse:
    """Stored preferences, or the defaults when the user has none yet."""
    return PreferencesResponse.model_validate(preferences.as_dict())


@router.put("", response_model=PreferencesResponse)
def update_preferences(
    body: PreferencesUpdateRequest,
    preferences: UserPreferences = Depends(get_user_preferences),
) -> PreferencesResponse:
    return _write(
        preferences,
        lambda: preferences.update(
            company_id=body.company_id,
            tour_state=body.tour_state.model_dump(exclude_unset=True) if body.tour_state else None,
            accessibility=(
                body.accessibility.model_dump(exclude_unset=True) if body.accessibility else None
            ),
        ),
    )


@router.post("/tours/{tour_id}/start", response_model=PreferencesResponse)
def start_tour(
    tour_id: str = Path(..., min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$"),
    preferences: UserPreferences = Depends(get_user_preferences),
) -> PreferencesResponse:
    return _write(preferences, lambda: preferences.start_tour(tour_id))


@router.put("/tours/current-step", response_model=PreferencesResponse)
def advance_tour(
    body: TourStepRequest,
    preferences: UserPreferences = Depends(get_user_preferences),
) -> PreferencesResponse:
    return _write(preferences, lambda: preferences.advance_tour(body.step))


@router.post("/tours/{tour_id}/complete", response_model=PreferencesResponse)
def complete_tour(
    tour_id: str = Path(..., min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$"),
    preferences: UserPreferences = Depends(get_user_preferences),
) -> PreferencesResponse:
    """Mark *tour_id* completed; closes it when it is the active tour."""
    return _write(preferences, lambda: preferences.complete_tour(tour_id))


@router.post("/tours/reset", response_model=PreferencesResponse)
def reset_tours(
    preferences: UserPreferences = Depends(get_user_preferences),
) -> PreferencesResponse:
    return _write(preferences, preferences.reset_tours)
