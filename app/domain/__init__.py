"""
app/domain package marker.
"""

from app.domain.categories import (
    EnergyCategory,
    IncidentType,
    ReuseApplication,
    RevenueSustainabilityCategory,
    WaterSource,
)
from app.domain.metric_outcome import CalculationOutcome, DateWindow, InvalidWindowError, OutcomeStatus

__all__ = [
    "CalculationOutcome",
    "DateWindow",
    "EnergyCategory",
    "IncidentType",
    "InvalidWindowError",
    "OutcomeStatus",
    "ReuseApplication",
    "RevenueSustainabilityCategory",
    "WaterSource",
]
