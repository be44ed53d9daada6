"""
Schemas for user preference endpoints.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field


class TourStateSchema(BaseModel):
    completed_tours: list[str] = Field(default_factory=list)
    active_tour: str | None = None
    current_step: int = Field(default=0, ge=0)
    dismissed: bool = False


class AccessibilitySchema(BaseModel):
    font_scale: float = Field(default=1.0, ge=0.5, le=3.0)
    high_contrast: bool = False
    reduce_motion: bool = False
    screen_reader_hints: bool = False


class TourStatePatch(BaseModel):
    model_config = {"extra": "forbid"}

    completed_tours: list[str] | None = None
    active_tour: str | None = None
    current_step: int | None = Field(default=None, ge=0)
    dismissed: bool | None = None


class AccessibilityPatch(BaseModel):
    model_config = {"extra": "forbid"}

    font_scale: float | None = Field(default=None, ge=0.5, le=3.0)
    high_contrast: bool | None = None
    reduce_motion: bool | None = None
    screen_reader_hints: bool | None = None


class PreferencesUpdateRequest(BaseModel):
    """
    Partial update. Only keys present in the request body are written;
    omitted documents and omitted keys keep their stored values.
    """

    company_id: UUID | None = None
    tour_state: TourStatePatch | None = None
    accessibility: AccessibilityPatch | None = None


class PreferencesResponse(BaseModel):
    user_id: str
    company_id: UUID | None = None
    tour_state: TourStateSchema
    accessibility: AccessibilitySchema


class TourStepRequest(BaseModel):
    step: int = Field(..., ge=0, description="Zero-based step of the active tour")
