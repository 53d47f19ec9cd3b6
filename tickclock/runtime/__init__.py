"""Timekeeping runtime modules."""

from tickclock.runtime.clock import Clock
from tickclock.runtime.config import TimeConfig, apply_time_config, load_time_config
from tickclock.runtime.driver import TickResult, TimeDriver
from tickclock.runtime.duration import Duration, Instant
from tickclock.runtime.errors import (
    InvalidFixedPeriodError,
    InvalidRelativeSpeedError,
    NegativeDurationError,
    NonIntegralWrapPeriodError,
    TimeError,
    WrapPeriodError,
    ZeroWrapPeriodError,
)
from tickclock.runtime.fixed_step import FixedStepRunner
from tickclock.runtime.logging import TimeRecordFilter, configure_logging, setup_logging
from tickclock.runtime.snapshot import TimeSnapshot, dumps_snapshot, snapshot_time
from tickclock.runtime.time import Time

__all__ = [
    "Clock",
    "Duration",
    "FixedStepRunner",
    "Instant",
    "InvalidFixedPeriodError",
    "InvalidRelativeSpeedError",
    "NegativeDurationError",
    "NonIntegralWrapPeriodError",
    "TickResult",
    "Time",
    "TimeConfig",
    "TimeDriver",
    "TimeError",
    "TimeRecordFilter",
    "TimeSnapshot",
    "WrapPeriodError",
    "ZeroWrapPeriodError",
    "apply_time_config",
    "configure_logging",
    "dumps_snapshot",
    "load_time_config",
    "setup_logging",
    "snapshot_time",
]
