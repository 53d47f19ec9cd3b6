"""Raw, virtual and fixed timekeeping for the application loop."""

from __future__ import annotations

import logging
import math

import numpy as np

from tickclock.runtime.clock import DEFAULT_WRAP_SECONDS, Clock
from tickclock.runtime.duration import Duration, Instant, TimeSource
from tickclock.runtime.errors import (
    InvalidFixedPeriodError,
    InvalidRelativeSpeedError,
    NonIntegralWrapPeriodError,
    ZeroWrapPeriodError,
)

_LOG = logging.getLogger("tickclock.time")

DEFAULT_MAXIMUM_DELTA = Duration.from_millis(333)
DEFAULT_FIXED_PERIOD = Duration.from_secs_f64(1.0 / 60.0)


class Time:
    """Fans one timestamp per tick out into raw, virtual and fixed clocks.

    ``update_with_instant`` advances the raw clock by the real gap since the
    previous update and the virtual clock by that gap after pause, speed and
    the maximum-delta clamp. The clamped gap also feeds the fixed-step
    accumulator, which ``expend_fixed`` drains one period at a time.

    Read accessors without a prefix report the current clock: the virtual
    clock after ``update_with_instant`` and the fixed clock while fixed steps
    are being expended. ``raw_*`` accessors always report the raw clock.
    """

    def __init__(
        self,
        startup: Instant | None = None,
        *,
        time_source: TimeSource | None = None,
    ) -> None:
        self._time_source: TimeSource = time_source or Instant.now
        self._startup = startup if startup is not None else self._time_source()
        self._first_update: Instant | None = None
        self._last_update: Instant | None = None
        self._paused = False
        # float64 keeps repeated scaling from drifting
        self._relative_speed = 1.0
        self._wrap_seconds = DEFAULT_WRAP_SECONDS
        self._maximum_delta: Duration | None = DEFAULT_MAXIMUM_DELTA
        self._fixed_accumulated = Duration.ZERO
        self._fixed_period = DEFAULT_FIXED_PERIOD
        self._raw_clock = Clock(DEFAULT_WRAP_SECONDS)
        self._virtual_clock = Clock(DEFAULT_WRAP_SECONDS)
        self._fixed_clock = Clock(DEFAULT_WRAP_SECONDS)
        self._current_clock = Clock(DEFAULT_WRAP_SECONDS)

    def update(self) -> None:
        """Sample the time source and update with the result."""
        self.update_with_instant(self._time_source())

    def update_with_instant(self, instant: Instant) -> None:
        """Advance all tracks to ``instant``.

        The first call reports a zero delta so that setup work done between
        construction and the first frame does not show up as one huge step.
        Elapsed time still includes that gap.
        """
        previous = self._startup if self._last_update is None else self._last_update
        raw_delta = instant.duration_since(previous)
        self._raw_clock.advance_by(raw_delta)
        if self._paused:
            scaled_delta = Duration.ZERO
        elif self._relative_speed != 1.0:
            scaled_delta = raw_delta.mul_f64(self._relative_speed)
        else:
            scaled_delta = raw_delta
        if self._maximum_delta is not None:
            delta = min(scaled_delta, self._maximum_delta)
        else:
            delta = scaled_delta
        self._virtual_clock.advance_by(delta)
        self._fixed_accumulated = self._fixed_accumulated + delta

        if self._last_update is None:
            self._first_update = instant
            self._raw_clock.advance_by(Duration.ZERO)
            self._virtual_clock.advance_by(Duration.ZERO)
        self._last_update = instant
        self._current_clock = self._virtual_clock.copy()

    def expend_fixed(self) -> bool:
        """Consume one fixed period from the accumulator.

        Returns ``True`` and switches the current clock to the fixed clock
        when a full period was available; otherwise leaves the accumulator
        alone, switches back to the virtual clock and returns ``False``.
        """
        remaining = self._fixed_accumulated.checked_sub(self._fixed_period)
        if remaining is None:
            self._current_clock = self._virtual_clock.copy()
            return False
        self._fixed_accumulated = remaining
        self._fixed_clock.advance_by(self._fixed_period)
        self._current_clock = self._fixed_clock.copy()
        return True

    def startup(self) -> Instant:
        return self._startup

    def first_update(self) -> Instant | None:
        return self._first_update

    def last_update(self) -> Instant | None:
        return self._last_update

    def delta(self) -> Duration:
        return self._current_clock.delta

    def delta_seconds(self) -> np.float32:
        return self._current_clock.delta_seconds

    def delta_seconds_f64(self) -> float:
        return self._current_clock.delta_seconds_f64

    def elapsed(self) -> Duration:
        return self._current_clock.elapsed

    def elapsed_seconds(self) -> np.float32:
        """Elapsed seconds as float32; precision degrades as the value grows.

        Use ``elapsed_seconds_wrapped`` where that loss matters.
        """
        return self._current_clock.elapsed_seconds

    def elapsed_seconds_f64(self) -> float:
        return self._current_clock.elapsed_seconds_f64

    def elapsed_wrapped(self) -> Duration:
        return self._current_clock.elapsed_wrapped

    def elapsed_seconds_wrapped(self) -> np.float32:
        return self._current_clock.elapsed_seconds_wrapped

    def elapsed_seconds_wrapped_f64(self) -> float:
        return self._current_clock.elapsed_seconds_wrapped_f64

    def raw_delta(self) -> Duration:
        return self._raw_clock.delta

    def raw_delta_seconds(self) -> np.float32:
        return self._raw_clock.delta_seconds

    def raw_delta_seconds_f64(self) -> float:
        return self._raw_clock.delta_seconds_f64

    def raw_elapsed(self) -> Duration:
        return self._raw_clock.elapsed

    def raw_elapsed_seconds(self) -> np.float32:
        return self._raw_clock.elapsed_seconds

    def raw_elapsed_seconds_f64(self) -> float:
        return self._raw_clock.elapsed_seconds_f64

    def raw_elapsed_wrapped(self) -> Duration:
        return self._raw_clock.elapsed_wrapped

    def raw_elapsed_seconds_wrapped(self) -> np.float32:
        return self._raw_clock.elapsed_seconds_wrapped

    def raw_elapsed_seconds_wrapped_f64(self) -> float:
        return self._raw_clock.elapsed_seconds_wrapped_f64

    def wrap_period(self) -> Duration:
        """Modulus for the wrapped views; one hour by default."""
        return Duration.from_secs(self._wrap_seconds)

    def set_wrap_period(self, wrap_period: Duration) -> None:
        """Set the wrap modulus; it applies from each clock's next advance."""
        if wrap_period.is_zero():
            raise ZeroWrapPeriodError("division by zero")
        if wrap_period.subsec_nanos() != 0:
            raise NonIntegralWrapPeriodError("wrap period must be integral seconds")
        self._wrap_seconds = wrap_period.as_secs()
        self._raw_clock.wrap_seconds = self._wrap_seconds
        self._virtual_clock.wrap_seconds = self._wrap_seconds
        self._fixed_clock.wrap_seconds = self._wrap_seconds
        _LOG.debug("time_wrap_period_set seconds=%d", self._wrap_seconds)

    def relative_speed(self) -> np.float32:
        return np.float32(self.relative_speed_f64())

    def relative_speed_f64(self) -> float:
        """Speed relative to real time; zero while paused."""
        if self._paused:
            return 0.0
        return self._relative_speed

    def set_relative_speed(self, ratio: float) -> None:
        self.set_relative_speed_f64(float(np.float32(ratio)))

    def set_relative_speed_f64(self, ratio: float) -> None:
        """Scale virtual time against real time. Raw measurements are unaffected."""
        value = float(ratio)
        if not math.isfinite(value):
            raise InvalidRelativeSpeedError("tried to go infinitely fast")
        if value < 0.0:
            raise InvalidRelativeSpeedError("tried to go back in time")
        self._relative_speed = value
        _LOG.debug("time_relative_speed_set ratio=%s", value)

    def pause(self) -> None:
        self._paused = True
        _LOG.debug("time_paused")

    def unpause(self) -> None:
        self._paused = False
        _LOG.debug("time_unpaused")

    def is_paused(self) -> bool:
        return self._paused

    def maximum_delta(self) -> Duration | None:
        return self._maximum_delta

    def set_maximum_delta(self, maximum_delta: Duration | None) -> None:
        """Clamp each virtual step to ``maximum_delta``; ``None`` disables the clamp."""
        self._maximum_delta = maximum_delta
        _LOG.debug(
            "time_maximum_delta_set ns=%s",
            None if maximum_delta is None else maximum_delta.nanos,
        )

    def fixed_period(self) -> Duration:
        return self._fixed_period

    def set_fixed_period(self, period: Duration) -> None:
        if period.is_zero():
            raise InvalidFixedPeriodError("fixed period must be > 0")
        self._fixed_period = period
        _LOG.debug("time_fixed_period_set ns=%d", period.nanos)

    def fixed_accumulated(self) -> Duration:
        return self._fixed_accumulated

    def raw_clock(self) -> Clock:
        """Copy of the raw clock; changing it does not affect this Time."""
        return self._raw_clock.copy()

    def virtual_clock(self) -> Clock:
        return self._virtual_clock.copy()

    def fixed_clock(self) -> Clock:
        return self._fixed_clock.copy()

    def current_clock(self) -> Clock:
        return self._current_clock.copy()


__all__ = ["DEFAULT_FIXED_PERIOD", "DEFAULT_MAXIMUM_DELTA", "Time"]
