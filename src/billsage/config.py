"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "BillSage"
    DB_FILENAME = "billsage.db"
    TESTING = False

    # Check-in context windows; fetched history is trimmed again before sending.
    CHAT_HISTORY_FETCH_LIMIT = 20
    CHAT_CONTEXT_WINDOW = 10
    CHAT_VIEW_LIMIT = 50
    UPCOMING_BILLS_LIMIT = 10
    ACTIVE_GOALS_LIMIT = 5

    ASSISTANT_TEMPERATURE = 0.7
    ASSISTANT_MAX_TOKENS = 500

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("BILLSAGE_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("BILLSAGE_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("BILLSAGE_DATABASE_URL", self._build_sqlite_url())
        self.TOKEN_MAX_AGE = _env_int("BILLSAGE_TOKEN_MAX_AGE", 86400)
        self.GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or None
        self.ASSISTANT_MODEL = os.getenv("BILLSAGE_ASSISTANT_MODEL", "gemini-1.5-flash")
        self.ASSISTANT_BASE_URL = os.getenv(
            "BILLSAGE_ASSISTANT_BASE_URL",
            "https://generativelanguage.googleapis.com/v1beta/openai/",
        )
        self.REMINDER_INTERVAL_MINUTES = _env_int("BILLSAGE_REMINDER_INTERVAL_MINUTES", 60)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("BILLSAGE_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("BILLSAGE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; the caller supplies the database URL."""

    TESTING = True
    __test__ = False

    def __init__(self, database_url: str | None = None) -> None:
        super().__init__()
        if database_url is not None:
            self.DATABASE_URL = database_url
        if self.SECRET_KEY == "replace-me":
            self.SECRET_KEY = "test-secret"
