"""
Environment settings.

Values are read lazily from `os.environ` so tests can patch the environment.
A local `.env` file is loaded once by `load_env()` at startup.
"""

from __future__ import annotations

import os
from urllib.parse import quote

from dotenv import load_dotenv

DEFAULT_DB_PORT = 5432
DEFAULT_APP_PORT = 8080


def load_env() -> None:
    # Real environment variables take precedence over .env entries.
    load_dotenv(override=False)


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def database_url() -> str:
    """
    Connection string for the posts database.

    `DATABASE_URL` wins when set. Otherwise the URL is assembled from
    DB_USERNAME, DB_PASSWORD, DB_HOST, DB_PORT and DB_NAME.
    """
    url = _env_str("DATABASE_URL")
    if url:
        return url

    username = _env_str("DB_USERNAME")
    name = _env_str("DB_NAME")
    if not username or not name:
        raise RuntimeError("Set DATABASE_URL or DB_USERNAME and DB_NAME.")

    password = os.environ.get("DB_PASSWORD", "")
    host = _env_str("DB_HOST", "localhost")
    port = _env_int("DB_PORT", DEFAULT_DB_PORT)

    credentials = quote(username, safe="")
    if password:
        credentials += ":" + quote(password, safe="")
    return f"postgresql://{credentials}@{host}:{port}/{quote(name, safe='')}"


def pool_min_size() -> int:
    return max(_env_int("DB_POOL_MIN_SIZE", 1), 0)


def pool_max_size() -> int:
    return max(_env_int("DB_POOL_MAX_SIZE", 5), 1, pool_min_size())


def command_timeout() -> float:
    return _env_float("DB_COMMAND_TIMEOUT", 30.0)


def cors_allow_origins() -> list[str]:
    raw = _env_str("CORS_ALLOW_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


def app_host() -> str:
    return _env_str("APP_HOST", "localhost")


def app_port() -> int:
    return _env_int("APP_PORT", DEFAULT_APP_PORT)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()
