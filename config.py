"""Application settings loaded from the environment."""
from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///projectsmanager.db"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return float(value)


class Config:
    """Default configuration, overridable through ``create_app(overrides)``."""

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # Seconds a single query may run before the store aborts it; 0 disables.
    QUERY_TIMEOUT_SECONDS = _env_float("QUERY_TIMEOUT_SECONDS", 5.0)
    AUTO_MIGRATE = _env_flag("AUTO_MIGRATE")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    PORT = int(os.environ.get("PORT", "8080"))
