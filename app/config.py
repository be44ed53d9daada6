"""
app/config.py

Calculator tunables read from the environment.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from db.config import env_float, env_int, load_env_files


@dataclass(frozen=True)
class MetricsSettings:
    """
    Tunables for the metric calculators.
    """

    freshwater_tds_mg_l: float = 1000.0
    training_benchmark_hours: float = 40.0
    default_window_days: int = 365


@lru_cache(maxsize=1)
def get_metrics_settings() -> MetricsSettings:
    """
    Return cached calculator settings; invalid values fall back to the defaults.
    """

    load_env_files()
    defaults = MetricsSettings()
    return MetricsSettings(
        freshwater_tds_mg_l=max(
            0.0, env_float("WATER_FRESHWATER_TDS_MG_L", defaults.freshwater_tds_mg_l)
        ),
        training_benchmark_hours=max(
            1.0, env_float("TRAINING_BENCHMARK_HOURS", defaults.training_benchmark_hours)
        ),
        default_window_days=max(1, env_int("METRICS_DEFAULT_WINDOW_DAYS", defaults.default_window_days)),
    )
