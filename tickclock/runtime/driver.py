"""Per-tick host plumbing: sample, update, then drain fixed steps."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tickclock.api.fixed_step import FixedStepConsumer
from tickclock.runtime.duration import Instant, TimeSource
from tickclock.runtime.time import Time

_LOG = logging.getLogger("tickclock.driver")


@dataclass(frozen=True, slots=True)
class TickResult:
    """Outcome of one driven tick."""

    instant: Instant
    fixed_steps: int


class TimeDriver:
    """Single writer for a Time instance.

    Each ``tick`` finishes both the update and the fixed-step phase before it
    returns, so anything reading the Time afterwards sees one consistent tick.
    """

    def __init__(
        self,
        time: Time,
        runner: FixedStepConsumer | None = None,
        *,
        time_source: TimeSource | None = None,
    ) -> None:
        self._time = time
        self._runner = runner
        self._time_source: TimeSource = time_source or Instant.now
        self._tick_count = 0

    @property
    def time(self) -> Time:
        return self._time

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def start(self) -> None:
        if self._runner is not None:
            self._runner.start(self._time)

    def tick(self) -> TickResult:
        instant = self._time_source()
        self._time.update_with_instant(instant)
        fixed_steps = 0
        if self._runner is not None:
            fixed_steps = self._runner.run(self._time)
        self._tick_count += 1
        if _LOG.isEnabledFor(logging.DEBUG):
            _LOG.debug(
                "time_tick index=%d delta_ns=%d raw_delta_ns=%d fixed_steps=%d",
                self._tick_count,
                self._time.delta().nanos,
                self._time.raw_delta().nanos,
                fixed_steps,
            )
        return TickResult(instant=instant, fixed_steps=fixed_steps)

    def shutdown(self) -> None:
        if self._runner is not None:
            self._runner.shutdown(self._time)


__all__ = ["TickResult", "TimeDriver"]
