"""
calculators/base.py

Abstract base class for all ESG metric calculators.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar


class BaseMetricCalculator(ABC):
    """
    Contract for metric calculator implementations.

    Subclasses receive pre-fetched rows (see :mod:`calculators.records`)
    and return a plain, JSON-serialisable dictionary.

    No I/O, no logging, and no side effects are permitted inside
    :meth:`calculate`. Given identical inputs the output is identical.
    """

    name: ClassVar[str]

    @abstractmethod
    def calculate(self, **inputs: Any) -> dict[str, Any]:
        """
        Reduce *inputs* into the calculator's aggregate result.

        Returns
        -------
        dict[str, Any]
            Totals, breakdowns, classification and comparison blocks.
        """

    @abstractmethod
    def empty(self) -> dict[str, Any]:
        """
        Zero-filled result returned when there is no data or the fetch failed.
        """
