"""Public timekeeping factories."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tickclock.api.fixed_step import FixedStepConsumer, create_fixed_step_runner

if TYPE_CHECKING:
    from tickclock.runtime.config import TimeConfig
    from tickclock.runtime.driver import TimeDriver
    from tickclock.runtime.duration import Instant, TimeSource
    from tickclock.runtime.time import Time


def create_time(
    config: "TimeConfig | None" = None,
    *,
    startup: "Instant | None" = None,
    time_source: "TimeSource | None" = None,
) -> "Time":
    """Create a Time configured from ``config`` or the active environment config."""
    from tickclock.runtime.config import apply_time_config, get_time_config
    from tickclock.runtime.time import Time

    time = Time(startup, time_source=time_source)
    return apply_time_config(time, config if config is not None else get_time_config())


def create_time_driver(
    config: "TimeConfig | None" = None,
    *,
    runner: FixedStepConsumer | None = None,
    startup: "Instant | None" = None,
    time_source: "TimeSource | None" = None,
) -> "TimeDriver":
    """Create a driver owning a fresh Time and a fixed-step runner."""
    from tickclock.runtime.config import get_time_config
    from tickclock.runtime.driver import TimeDriver

    resolved = config if config is not None else get_time_config()
    time = create_time(resolved, startup=startup, time_source=time_source)
    if runner is None:
        runner = create_fixed_step_runner(warn_steps_per_tick=resolved.fixed_warn_steps)
    return TimeDriver(time, runner, time_source=time_source)
