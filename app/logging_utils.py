"""
One-line JSON log events for calculations and record writes.

Field values are coerced before encoding: enums log their value, objects
exposing ``as_dict`` (date windows) log that mapping, and anything else
JSON cannot encode (UUIDs, dates) logs as ``str``. ``None`` fields are
dropped.
"""

from __future__ import annotations

import json
import logging
import time
from enum import Enum
from typing import Any


def _coerce(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    as_dict = getattr(value, "as_dict", None)
    if callable(as_dict):
        return as_dict()
    return value


def elapsed_ms(started: float) -> float:
    """Milliseconds since *started*, a ``time.monotonic()`` reading."""
    return round((time.monotonic() - started) * 1000, 2)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    if not logger.isEnabledFor(level):
        return
    payload = {name: _coerce(value) for name, value in fields.items() if value is not None}
    payload["event"] = event
    logger.log(level, json.dumps(payload, default=str, separators=(",", ":"), sort_keys=True))
