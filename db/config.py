"""
Environment lookups for the ESG metrics store and the calculators.

`.env` files only fill gaps: a variable already present in the process
environment always wins. The store URL is taken from the first non-empty
variable returned by `database_url_candidates`.
"""

from __future__ import annotations

import os
from pathlib import Path

ENV_FILENAMES = (".env", ".env.local")
CLOUD_ENVIRONMENTS = frozenset({"prod", "production", "staging", "cloud"})

_DRIVER_ALIASES = {
    "postgres": "postgresql+psycopg",
    "postgresql": "postgresql+psycopg",
}
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    if not line or line.startswith("#"):
        return None

    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None

    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return key, value[1:-1]
    # Unquoted values may carry a trailing comment.
    return key, value.split(" #", 1)[0].rstrip()


def load_env_files(project_root: Path | None = None) -> list[str]:
    """
    Copy KEY=VALUE pairs from the project's `.env` files into ``os.environ``.

    Returns the names that were set, in file order.
    """

    root = project_root or Path(__file__).resolve().parents[1]
    loaded: list[str] = []
    for filename in ENV_FILENAMES:
        env_path = root / filename
        if not env_path.is_file():
            continue
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_env_line(raw_line)
            if parsed is None or parsed[0] in os.environ:
                continue
            os.environ[parsed[0]] = parsed[1]
            loaded.append(parsed[0])
    return loaded


def normalize_postgres_url(url: str) -> str:
    """Rewrite bare ``postgres``/``postgresql`` schemes to the psycopg v3 driver."""
    scheme, sep, rest = url.partition("://")
    if sep and scheme in _DRIVER_ALIASES:
        return f"{_DRIVER_ALIASES[scheme]}://{rest}"
    return url


def database_url_candidates(environment: str | None = None) -> list[str]:
    """
    Variables consulted for the store URL, highest priority first.

    ``CLOUD_DATABASE_URL`` is only considered when *environment* (default:
    ``$ENVIRONMENT``) names a cloud-like deployment.
    """

    if environment is None:
        environment = os.getenv("ENVIRONMENT", "local")
    names = ["DATABASE_URL"]
    if environment.strip().lower() in CLOUD_ENVIRONMENTS:
        names.append("CLOUD_DATABASE_URL")
    names.append("LOCAL_DATABASE_URL")
    return names


def resolve_database_url() -> str:
    load_env_files()
    names = database_url_candidates()
    for name in names:
        value = os.getenv(name, "").strip()
        if value:
            return normalize_postgres_url(value)
    raise RuntimeError(
        "No database URL configured for the ESG metrics store "
        f"(checked {', '.join(names)})."
    )


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Integer variable; unset or unparsable values give *default*."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    """Float variable; unset or unparsable values give *default*."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value.strip())
    except ValueError:
        return default
