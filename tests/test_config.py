from __future__ import annotations

import os

import pytest

from app.config import MetricsSettings, get_metrics_settings
from db.config import (
    database_url_candidates,
    env_flag,
    env_float,
    env_int,
    load_env_files,
    normalize_postgres_url,
    resolve_database_url,
)
from db.session import EngineSettings


@pytest.fixture()
def fresh_settings():
    get_metrics_settings.cache_clear()
    yield
    get_metrics_settings.cache_clear()


class TestMetricsSettings:
    def test_defaults(self, fresh_settings, monkeypatch) -> None:
        for name in ("WATER_FRESHWATER_TDS_MG_L", "TRAINING_BENCHMARK_HOURS", "METRICS_DEFAULT_WINDOW_DAYS"):
            monkeypatch.delenv(name, raising=False)
        assert get_metrics_settings() == MetricsSettings()

    def test_environment_overrides(self, fresh_settings, monkeypatch) -> None:
        monkeypatch.setenv("WATER_FRESHWATER_TDS_MG_L", "500")
        monkeypatch.setenv("TRAINING_BENCHMARK_HOURS", "24.5")
        monkeypatch.setenv("METRICS_DEFAULT_WINDOW_DAYS", "90")
        settings = get_metrics_settings()
        assert settings.freshwater_tds_mg_l == 500.0
        assert settings.training_benchmark_hours == 24.5
        assert settings.default_window_days == 90

    def test_invalid_values_fall_back(self, fresh_settings, monkeypatch) -> None:
        monkeypatch.setenv("TRAINING_BENCHMARK_HOURS", "forty")
        monkeypatch.setenv("METRICS_DEFAULT_WINDOW_DAYS", "0")
        settings = get_metrics_settings()
        assert settings.training_benchmark_hours == 40.0
        assert settings.default_window_days == 1


class TestDatabaseUrl:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("postgres://u:p@h/db", "postgresql+psycopg://u:p@h/db"),
            ("postgresql://u:p@h/db", "postgresql+psycopg://u:p@h/db"),
            ("postgresql+psycopg://u:p@h/db", "postgresql+psycopg://u:p@h/db"),
        ],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_postgres_url(raw) == expected

    def test_cloud_url_only_in_cloud_environments(self, monkeypatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("CLOUD_DATABASE_URL", "postgres://cloud/db")
        monkeypatch.setenv("LOCAL_DATABASE_URL", "postgres://local/db")

        monkeypatch.setenv("ENVIRONMENT", "production")
        assert resolve_database_url() == "postgresql+psycopg://cloud/db"

        monkeypatch.setenv("ENVIRONMENT", "local")
        assert resolve_database_url() == "postgresql+psycopg://local/db"

    def test_missing_url_raises(self, monkeypatch) -> None:
        for name in ("DATABASE_URL", "CLOUD_DATABASE_URL", "LOCAL_DATABASE_URL"):
            monkeypatch.delenv(name, raising=False)
        with pytest.raises(RuntimeError):
            resolve_database_url()


class TestEngineSettings:
    def test_pool_tuning_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgres://u:p@h/db")
        monkeypatch.setenv("SQL_ECHO", "yes")
        monkeypatch.setenv("DB_POOL_SIZE", "12")
        monkeypatch.setenv("DB_MAX_OVERFLOW", "not-a-number")
        settings = EngineSettings.from_env()
        assert settings.url == "postgresql+psycopg://u:p@h/db"
        assert settings.echo is True
        assert settings.pool_size == 12
        assert settings.max_overflow == 10

    def test_non_postgres_url_rejected(self, monkeypatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "sqlite:///metrics.db")
        with pytest.raises(RuntimeError):
            EngineSettings.from_env()


def test_env_helpers(monkeypatch) -> None:
    monkeypatch.setenv("FLAG_ON", " On ")
    monkeypatch.setenv("SOME_INT", " 7 ")
    assert env_flag("FLAG_ON") is True
    assert env_flag("FLAG_UNSET_FOR_TEST") is False
    assert env_int("SOME_INT", 1) == 7
    assert env_int("INT_UNSET_FOR_TEST", 3) == 3


class TestEnvFiles:
    def test_parsing_and_precedence(self, tmp_path, monkeypatch) -> None:
        (tmp_path / ".env").write_text(
            "# store\n"
            "export STORE_URL='postgres://u:p@h/db'\n"
            "KEEP=from-file\n"
            "PLAIN=value # trailing comment\n"
            "not a pair\n",
            encoding="utf-8",
        )
        (tmp_path / ".env.local").write_text('PLAIN=override\nLOCAL_ONLY="x y"\n', encoding="utf-8")
        monkeypatch.setattr(os, "environ", {"KEEP": "from-process"})

        loaded = load_env_files(tmp_path)

        assert loaded == ["STORE_URL", "PLAIN", "LOCAL_ONLY"]
        assert os.environ["KEEP"] == "from-process"
        assert os.environ["STORE_URL"] == "postgres://u:p@h/db"
        assert os.environ["PLAIN"] == "value"
        assert os.environ["LOCAL_ONLY"] == "x y"

    def test_missing_files_load_nothing(self, tmp_path) -> None:
        assert load_env_files(tmp_path) == []


class TestUrlCandidates:
    @pytest.mark.parametrize(
        ("environment", "expected"),
        [
            ("local", ["DATABASE_URL", "LOCAL_DATABASE_URL"]),
            (" Staging ", ["DATABASE_URL", "CLOUD_DATABASE_URL", "LOCAL_DATABASE_URL"]),
        ],
    )
    def test_cloud_variable_only_for_cloud_environments(self, environment: str, expected: list[str]) -> None:
        assert database_url_candidates(environment) == expected

    def test_blank_direct_url_is_skipped(self, monkeypatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "   ")
        monkeypatch.setenv("ENVIRONMENT", "local")
        monkeypatch.setenv("LOCAL_DATABASE_URL", "postgresql://local/db")
        assert resolve_database_url() == "postgresql+psycopg://local/db"

    def test_other_schemes_are_left_alone(self) -> None:
        assert normalize_postgres_url("mysql://u@h/db") == "mysql://u@h/db"


def test_env_float(monkeypatch) -> None:
    monkeypatch.setenv("SOME_FLOAT", " 2.5 ")
    monkeypatch.setenv("BAD_FLOAT", "2,5")
    assert env_float("SOME_FLOAT", 1.0) == 2.5
    assert env_float("BAD_FLOAT", 1.0) == 1.0
