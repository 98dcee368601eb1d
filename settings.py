from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_LATENCY_ENV = "DASHBOARD_FETCH_LATENCY_SECONDS"
_INTERVAL_ENV = "DASHBOARD_UPDATE_INTERVAL_SECONDS"
_MAX_POINTS_ENV = "DASHBOARD_MAX_POINTS"
_SEED_ENV = "DASHBOARD_RANDOM_SEED"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    fetch_latency_seconds: float
    update_interval_seconds: float
    max_points: int
    random_seed: Optional[int]
    log_level: str


def _read_float_env(name: str, default: float, allow_zero: bool = False) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    if parsed > 0 or (allow_zero and parsed == 0):
        return parsed
    return default


def _read_max_points(default: int) -> int:
    value = os.getenv(_MAX_POINTS_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_seed() -> Optional[int]:
    value = os.getenv(_SEED_ENV)
    if value is None:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    try:
        return int(candidate)
    except ValueError:
        return None


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        fetch_latency_seconds=_read_float_env(_LATENCY_ENV, 0.4, allow_zero=True),
        update_interval_seconds=_read_float_env(_INTERVAL_ENV, 10.0),
        max_points=_read_max_points(100),
        random_seed=_read_seed(),
        log_level=_read_log_level("INFO"),
    )
