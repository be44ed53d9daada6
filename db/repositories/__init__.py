"""
Repository layer exports.
"""

from db.repositories.errors import (
    CompanyInactiveError,
    CompanyNotFoundError,
    MetricRepositoryError,
    RecordPersistenceError,
)
from db.repositories.metric_record_repository import MetricRecordRepository
from db.repositories.preferences_repository import PreferencesRepository

__all__ = [
    "MetricRecordRepository",
    "PreferencesRepository",
    "MetricRepositoryError",
    "CompanyNotFoundError",
    "CompanyInactiveError",
    "RecordPersistenceError",
]
