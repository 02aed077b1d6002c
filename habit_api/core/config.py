"""
Configuration helpers for the Habit Tracker backend.

Settings are read once from environment variables and cached so that
routers/services never fetch os.environ directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import json
import logging
import os

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefaultHabit:
    """Habit template inserted for accounts logging in without any habits."""

    text: str
    category: str
    description: str = ""
    streak: int = 0
    completed: bool = False


DEFAULT_HABITS: tuple[DefaultHabit, ...] = (
    DefaultHabit(
        text="Morning Exercise",
        description="30 minutes of cardio or strength training",
        category="health",
    ),
)


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    cors_origins: tuple[str, ...]
    log_level: str
    auto_create_tables: bool
    login_rate_limit: int
    login_rate_window_seconds: int
    signup_rate_limit: int
    signup_rate_window_seconds: int
    default_habits: tuple[DefaultHabit, ...]


def _bool(value, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_default_habits(raw: str | None) -> tuple[DefaultHabit, ...]:
    if raw is None or not raw.strip():
        return DEFAULT_HABITS
    try:
        items = json.loads(raw)
    except ValueError:
        logger.warning("DEFAULT_HABITS is not valid JSON; using built-in defaults")
        return DEFAULT_HABITS
    if not isinstance(items, list):
        logger.warning("DEFAULT_HABITS must be a JSON list; using built-in defaults")
        return DEFAULT_HABITS
    habits = []
    for item in items:
        if not isinstance(item, dict):
            continue
        text = str(item.get("text") or "").strip()
        category = str(item.get("category") or "").strip()
        if not text or not category:
            continue
        try:
            streak = max(0, int(item.get("streak") or 0))
        except (TypeError, ValueError):
            streak = 0
        habits.append(
            DefaultHabit(
                text=text,
                category=category,
                description=str(item.get("description") or ""),
                streak=streak,
                completed=_bool(item.get("completed"), False),
            )
        )
    return tuple(habits)


def _parse_origins(raw: str | None, app_env: str) -> tuple[str, ...]:
    if raw is None:
        return () if app_env == "prod" else ("*",)
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    return Settings(
        app_env=app_env,
        database_url=os.getenv("DATABASE_URL", "sqlite:///./habits.db").strip(),
        cors_origins=_parse_origins(os.getenv("CORS_ORIGINS"), app_env),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        auto_create_tables=_bool(os.getenv("AUTO_CREATE_TABLES"), True),
        login_rate_limit=_int(os.getenv("LOGIN_RATE_LIMIT", "10"), 10),
        login_rate_window_seconds=_int(os.getenv("LOGIN_RATE_WINDOW_SECONDS", "60"), 60),
        signup_rate_limit=_int(os.getenv("SIGNUP_RATE_LIMIT", "5"), 5),
        signup_rate_window_seconds=_int(os.getenv("SIGNUP_RATE_WINDOW_SECONDS", "300"), 300),
        default_habits=_parse_default_habits(os.getenv("DEFAULT_HABITS")),
    )
