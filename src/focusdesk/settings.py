from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - FOCUSDESK_DATA_ROOT: overrides the platform application-data root (unset by default)
    - FOCUSDESK_APP_NAME: application name used to derive the data root. Default 'focusdesk'
    - LOG_LEVEL: one of CRITICAL, ERROR, WARNING, INFO (default), DEBUG
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    """

    data_root: Optional[str]
    app_name: str
    log_level: str
    cors_allow_origins: List[str]


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    data_root = os.getenv("FOCUSDESK_DATA_ROOT") or None
    app_name = _get_env("FOCUSDESK_APP_NAME", "focusdesk").strip()

    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in _LOG_LEVELS:
        # Fallback to INFO if unsupported
        log_level = "INFO"

    return Settings(
        data_root=data_root.strip() if data_root else None,
        app_name=app_name or "focusdesk",
        log_level=log_level,
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
    )
