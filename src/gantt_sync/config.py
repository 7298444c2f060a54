# src/gantt_sync/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (offline demo list when no site is set).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "GANTT"

# Real environment variables always win over .env entries.
load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Remote list ----
    site_url: str
    list_title: str
    access_token: Optional[str]

    # ---- HTTP ----
    http_timeout_seconds: float
    verify_tls: bool

    @property
    def offline_mode(self) -> bool:
        return not self.site_url

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "gantt-sync").strip() or "gantt-sync"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/gantt"))

        site_url = _env(_k("SITE_URL"), "").strip().rstrip("/")
        list_title = _env(_k("LIST_TITLE"), "Tasks").strip() or "Tasks"
        access_token = _env(_k("ACCESS_TOKEN"), "").strip() or None

        http_timeout_seconds = max(1.0, _env_float(_k("HTTP_TIMEOUT_SECONDS"), 20.0))
        verify_tls = _env_bool(_k("VERIFY_TLS"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            site_url=site_url,
            list_title=list_title,
            access_token=access_token,
            http_timeout_seconds=http_timeout_seconds,
            verify_tls=verify_tls,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
