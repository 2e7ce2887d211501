from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class AppSettings:
    log_level: str = "INFO"
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    toggle_enabled: bool = True
    toggle_profile: str = "Admin"
    toggle_permission: str = "CanEdit"
    toggle_interval_seconds: float = 300.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppSettings":
        if environ is None:
            load_dotenv()
            environ = os.environ

        interval = _float(environ, "TOGGLE_INTERVAL_SECONDS", cls.toggle_interval_seconds)
        if interval <= 0:
            raise ValueError("TOGGLE_INTERVAL_SECONDS must be > 0")

        return cls(
            log_level=environ.get("LOG_LEVEL", cls.log_level).upper(),
            api_host=environ.get("API_HOST", cls.api_host),
            api_port=_int(environ, "API_PORT", cls.api_port),
            toggle_enabled=_bool(environ, "TOGGLE_ENABLED", cls.toggle_enabled),
            toggle_profile=environ.get("TOGGLE_PROFILE", cls.toggle_profile),
            toggle_permission=environ.get("TOGGLE_PERMISSION", cls.toggle_permission),
            toggle_interval_seconds=interval,
        )


def _int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc


def _float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc


def _bool(environ: Mapping[str, str], key: str, default: bool) -> bool:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    text = raw.strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"{key} must be a boolean, got {raw!r}")
