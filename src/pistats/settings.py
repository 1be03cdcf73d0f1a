"""Environment-driven settings for pistats."""

import math
import os
from dataclasses import dataclass
from functools import lru_cache

ON_ERROR_ABORT = "abort"
ON_ERROR_RETRY = "retry"
ON_ERROR_POLICIES = (ON_ERROR_ABORT, ON_ERROR_RETRY)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

_INTERVAL_ENV = "PISTATS_INTERVAL"
_ON_ERROR_ENV = "PISTATS_ON_ERROR"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    interval: float
    on_error: str
    log_level: str


def _read_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip() or None


def _read_interval(default: float) -> float:
    candidate = _read_env(_INTERVAL_ENV)
    if candidate is None:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if math.isfinite(parsed) and parsed > 0 else default


def _read_on_error(default: str) -> str:
    candidate = _read_env(_ON_ERROR_ENV)
    if candidate is None:
        return default
    candidate = candidate.lower()
    return candidate if candidate in ON_ERROR_POLICIES else default


def _read_log_level(default: str) -> str:
    candidate = _read_env(_LOG_LEVEL_ENV)
    if candidate is None:
        return default
    candidate = candidate.upper()
    return candidate if candidate in LOG_LEVELS else default


@lru_cache
def get_settings() -> Settings:
    return Settings(
        interval=_read_interval(1.0),
        on_error=_read_on_error(ON_ERROR_ABORT),
        log_level=_read_log_level("WARNING"),
    )
