"""
app/services package marker.
"""

from app.services.metrics_service import ESGMetricsService, MetricFetchError
from app.services.preferences_service import UserPreferences
from app.services.record_entry_service import RecordEntryService

__all__ = [
    "ESGMetricsService",
    "MetricFetchError",
    "RecordEntryService",
    "UserPreferences",
]
