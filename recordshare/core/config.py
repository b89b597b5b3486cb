"""
Environment-driven settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_JWT_SECRET = "dev-change-this-secret"


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str = ""
    jwt_secret: str = DEFAULT_JWT_SECRET
    access_token_expire_minutes: int = 24 * 60
    auth_cookie_name: str = "access_token"
    db_pool_min: int = 1
    db_pool_max: int = 5
    db_command_timeout: float = 30.0
    host: str = "127.0.0.1"
    port: int = 3042
    log_level: str = "INFO"
    apply_schema: bool = True


def load_settings() -> Settings:
    # In production, set JWT_SECRET; the default only suits local development.
    return Settings(
        database_url=os.environ.get("DATABASE_URL", "").strip(),
        jwt_secret=_env_str("JWT_SECRET", DEFAULT_JWT_SECRET),
        access_token_expire_minutes=_env_int("ACCESS_TOKEN_EXPIRE_MIN", 24 * 60),
        auth_cookie_name=_env_str("AUTH_COOKIE_NAME", "access_token"),
        db_pool_min=_env_int("DB_POOL_MIN", 1),
        db_pool_max=_env_int("DB_POOL_MAX", 5),
        db_command_timeout=float(_env_int("DB_COMMAND_TIMEOUT", 30)),
        host=_env_str("HOST", "127.0.0.1"),
        port=_env_int("PORT", 3042),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
        apply_schema=_env_bool("APPLY_SCHEMA", True),
    )
