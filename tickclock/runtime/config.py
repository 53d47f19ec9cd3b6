"""Centralized timekeeping configuration sourced from environment."""

from __future__ import annotations

import math
import os
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Mapping

from tickclock.runtime.clock import DEFAULT_WRAP_SECONDS
from tickclock.runtime.duration import NANOS_PER_MILLI, Duration
from tickclock.runtime.fixed_step import DEFAULT_WARN_STEPS_PER_TICK
from tickclock.runtime.time import Time


@dataclass(frozen=True, slots=True)
class TimeConfig:
    """Immutable timekeeping configuration."""

    fixed_period_seconds: float = 1.0 / 60.0
    maximum_delta_ms: float | None = 333.0
    wrap_seconds: int = DEFAULT_WRAP_SECONDS
    relative_speed: float = 1.0
    start_paused: bool = False
    fixed_warn_steps: int = DEFAULT_WARN_STEPS_PER_TICK
    log_level: str = "INFO"


_TIME_CONFIG: ContextVar[TimeConfig | None] = ContextVar("tickclock_time_config", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    positive: bool = False,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
        if not math.isfinite(value) or (positive and value <= 0.0):
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def resolve_log_level_name(
    default: str = "INFO", *, env: Mapping[str, str] | None = None
) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("TICKCLOCK_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env) or default
    return value.strip().upper()


def load_time_config(*, env: Mapping[str, str] | None = None) -> TimeConfig:
    """Load immutable time configuration from env vars."""
    defaults = TimeConfig()
    maximum_delta_ms = _float("TICKCLOCK_MAX_DELTA_MS", 333.0, env=env)
    return TimeConfig(
        fixed_period_seconds=_float(
            "TICKCLOCK_FIXED_PERIOD_SECONDS",
            defaults.fixed_period_seconds,
            positive=True,
            env=env,
        ),
        maximum_delta_ms=maximum_delta_ms if maximum_delta_ms > 0.0 else None,
        wrap_seconds=_int("TICKCLOCK_WRAP_SECONDS", defaults.wrap_seconds, minimum=1, env=env),
        relative_speed=_float(
            "TICKCLOCK_RELATIVE_SPEED", defaults.relative_speed, minimum=0.0, env=env
        ),
        start_paused=_flag("TICKCLOCK_START_PAUSED", defaults.start_paused, env=env),
        fixed_warn_steps=_int(
            "TICKCLOCK_FIXED_WARN_STEPS", defaults.fixed_warn_steps, minimum=1, env=env
        ),
        log_level=resolve_log_level_name(defaults.log_level, env=env),
    )


def apply_time_config(time: Time, config: TimeConfig) -> Time:
    """Push ``config`` into ``time`` through its validated setters."""
    time.set_fixed_period(Duration.from_secs_f64(config.fixed_period_seconds))
    if config.maximum_delta_ms is None:
        time.set_maximum_delta(None)
    else:
        time.set_maximum_delta(Duration(round(config.maximum_delta_ms * NANOS_PER_MILLI)))
    time.set_wrap_period(Duration.from_secs(config.wrap_seconds))
    time.set_relative_speed_f64(config.relative_speed)
    if config.start_paused:
        time.pause()
    else:
        time.unpause()
    return time


def initialize_time_config(*, env: Mapping[str, str] | None = None) -> TimeConfig:
    config = load_time_config(env=env)
    _TIME_CONFIG.set(config)
    return config


def set_time_config(config: TimeConfig) -> TimeConfig:
    _TIME_CONFIG.set(config)
    return config


def get_time_config() -> TimeConfig:
    config = _TIME_CONFIG.get()
    if config is not None:
        return config
    return initialize_time_config()


__all__ = [
    "TimeConfig",
    "apply_time_config",
    "get_time_config",
    "initialize_time_config",
    "load_time_config",
    "resolve_log_level_name",
    "set_time_config",
]
