"""
app/schemas package marker.
"""

from app.schemas.metrics import DateWindowResponse, MetricOutcomeResponse
from app.schemas.preferences import PreferencesResponse, PreferencesUpdateRequest
from app.schemas.records import (
    EnergyRecordCreate,
    RecordCreatedResponse,
    RevenueRecordCreate,
    SafetyIncidentCreate,
    WaterRecordCreate,
)

__all__ = [
    "DateWindowResponse",
    "MetricOutcomeResponse",
    "PreferencesResponse",
    "PreferencesUpdateRequest",
    "WaterRecordCreate",
    "EnergyRecordCreate",
    "SafetyIncidentCreate",
    "RevenueRecordCreate",
    "RecordCreatedResponse",
]
