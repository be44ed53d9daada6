"""
Repository-layer exceptions for metric record reads and writes.
"""

from __future__ import annotations


class MetricRepositoryError(Exception):
    """Base exception for metric repository failures."""


class CompanyNotFoundError(MetricRepositoryError):
    """Raised when a referenced company does not exist."""


class CompanyInactiveError(MetricRepositoryError):
    """Raised when a referenced company is not active."""


class RecordPersistenceError(MetricRepositoryError):
    """Raised when writing a metric record fails and the session was rolled back."""
