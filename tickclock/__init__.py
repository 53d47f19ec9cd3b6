"""Raw, virtual and fixed-step timekeeping for real-time application loops."""

from tickclock.api import SystemSpec, create_fixed_step_runner, create_time, create_time_driver
from tickclock.runtime.clock import Clock
from tickclock.runtime.duration import Duration, Instant
from tickclock.runtime.time import Time

__all__ = [
    "Clock",
    "Duration",
    "Instant",
    "SystemSpec",
    "Time",
    "create_fixed_step_runner",
    "create_time",
    "create_time_driver",
]
