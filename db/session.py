"""
db/session.py

Engine and request-scoped sessions for the metrics store.

The engine is built lazily on first use so that importing the application
(or the models) never opens a connection.
"""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from db.config import env_flag, env_int, resolve_database_url


@dataclass(frozen=True)
class EngineSettings:
    url: str
    echo: bool = False
    pool_recycle: int = 1800
    pool_size: int = 5
    max_overflow: int = 10

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """
        Read the store URL and pool tuning from the environment.

        Raises RuntimeError when the resolved URL is not PostgreSQL.
        """
        url = resolve_database_url()
        if not url.startswith("postgresql"):
            raise RuntimeError("The metrics store only supports PostgreSQL URLs.")
        return cls(
            url=url,
            echo=env_flag("SQL_ECHO"),
            pool_recycle=env_int("DB_POOL_RECYCLE", 1800),
            pool_size=env_int("DB_POOL_SIZE", 5),
            max_overflow=env_int("DB_MAX_OVERFLOW", 10),
        )


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    settings = EngineSettings.from_env()
    return create_engine(
        settings.url,
        echo=settings.echo,
        pool_pre_ping=True,
        pool_recycle=settings.pool_recycle,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
    )


@lru_cache(maxsize=1)
def _session_factory() -> sessionmaker:
    return sessionmaker(
        bind=get_engine(),
        class_=Session,
        autoflush=False,
        expire_on_commit=False,
    )


def SessionLocal() -> Session:
    return _session_factory()()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, always closed."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
