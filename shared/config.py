"""Configuration helpers for environment variables."""

from __future__ import annotations

import os
import logging

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


_TRUE_VALUES = {"1", "true"}
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _should_load_dotenv() -> bool:
    """Return whether local dotenv loading should run."""
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: str | None = None) -> str | None:
    """Return a raw environment value or default."""
    return os.getenv(name, default)


def app_env() -> str:
    """Return the current application environment."""
    return (get_env("APP_ENV", "dev") or "dev").strip() or "dev"


def log_level() -> str:
    """Return the configured log level name, falling back to INFO."""
    raw_value = (get_env("LEDGER_LOG_LEVEL", "") or "").strip().upper()
    if not raw_value:
        return "INFO"

    if raw_value not in _LOG_LEVELS:
        logger.warning("log_level_unknown value=%s; falling back to INFO", raw_value)
        return "INFO"

    return raw_value


def seed_demo_transactions() -> bool:
    """Return whether the in-memory ledger starts with demo transactions."""
    if app_env().strip().lower() in {"test", "ci"}:
        return False

    raw_value = get_env("LEDGER_SEED_DEMO", "") or ""
    return raw_value.strip().lower() in _TRUE_VALUES


def ledger_dev_port() -> int:
    """Return the local port the ledger API is served on during development."""
    raw_value = (get_env("LEDGER_DEV_PORT", "") or "").strip()
    return int(raw_value) if raw_value.isdigit() else 8000


def cors_allow_origins() -> list[str]:
    """Return CORS origins: explicit list, else the local API port in dev, else the ledger UI."""
    raw_origins = get_env("CORS_ALLOW_ORIGINS", "") or ""
    origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
    if origins:
        return origins

    if app_env().strip().lower() in {"dev", "local"}:
        port = ledger_dev_port()
        return [f"http://localhost:{port}", f"http://127.0.0.1:{port}"]

    ledger_ui_origin = (get_env("LEDGER_UI_ORIGIN", "") or "").strip()
    if ledger_ui_origin:
        return [ledger_ui_origin]

    logger.warning(
        "ledger_cors_origins_unset app_env=%s; set CORS_ALLOW_ORIGINS or LEDGER_UI_ORIGIN",
        app_env(),
    )
    return []
