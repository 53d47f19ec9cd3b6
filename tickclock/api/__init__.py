"""Public timekeeping API contracts."""

from tickclock.api.fixed_step import (
    FixedStepConsumer,
    FixedStepSystem,
    SystemSpec,
    create_fixed_step_runner,
)
from tickclock.api.logging import LoggingConfig
from tickclock.api.time import create_time, create_time_driver

__all__ = [
    "FixedStepConsumer",
    "FixedStepSystem",
    "LoggingConfig",
    "SystemSpec",
    "create_fixed_step_runner",
    "create_time",
    "create_time_driver",
]
