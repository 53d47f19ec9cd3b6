"""Read-only introspection of Time state for debugging and tooling."""

from __future__ import annotations

from dataclasses import asdict, dataclass

import orjson

from tickclock.runtime.clock import Clock
from tickclock.runtime.duration import Duration, Instant
from tickclock.runtime.time import Time


@dataclass(frozen=True, slots=True)
class ClockSnapshot:
    delta_ns: int
    delta_seconds: float
    elapsed_ns: int
    elapsed_seconds: float
    elapsed_wrapped_ns: int
    elapsed_seconds_wrapped: float
    wrap_seconds: int


@dataclass(frozen=True, slots=True)
class TimeSnapshot:
    """Point-in-time copy of every public Time reading."""

    startup_ns: int
    first_update_ns: int | None
    last_update_ns: int | None
    paused: bool
    relative_speed: float
    wrap_period_seconds: int
    maximum_delta_ns: int | None
    fixed_period_ns: int
    fixed_accumulated_ns: int
    raw: ClockSnapshot
    virtual: ClockSnapshot
    fixed: ClockSnapshot
    current: ClockSnapshot

    def as_dict(self) -> dict[str, object]:
        return asdict(self)


def _instant_ns(value: Instant | None) -> int | None:
    return None if value is None else value.nanos


def _duration_ns(value: Duration | None) -> int | None:
    return None if value is None else value.nanos


def snapshot_clock(clock: Clock) -> ClockSnapshot:
    return ClockSnapshot(
        delta_ns=clock.delta.nanos,
        delta_seconds=clock.delta_seconds_f64,
        elapsed_ns=clock.elapsed.nanos,
        elapsed_seconds=clock.elapsed_seconds_f64,
        elapsed_wrapped_ns=clock.elapsed_wrapped.nanos,
        elapsed_seconds_wrapped=clock.elapsed_seconds_wrapped_f64,
        wrap_seconds=clock.wrap_seconds,
    )


def snapshot_time(time: Time) -> TimeSnapshot:
    """Capture ``time`` through its public accessors only."""
    return TimeSnapshot(
        startup_ns=time.startup().nanos,
        first_update_ns=_instant_ns(time.first_update()),
        last_update_ns=_instant_ns(time.last_update()),
        paused=time.is_paused(),
        relative_speed=time.relative_speed_f64(),
        wrap_period_seconds=time.wrap_period().as_secs(),
        maximum_delta_ns=_duration_ns(time.maximum_delta()),
        fixed_period_ns=time.fixed_period().nanos,
        fixed_accumulated_ns=time.fixed_accumulated().nanos,
        raw=snapshot_clock(time.raw_clock()),
        virtual=snapshot_clock(time.virtual_clock()),
        fixed=snapshot_clock(time.fixed_clock()),
        current=snapshot_clock(time.current_clock()),
    )


def dumps_snapshot(snapshot: TimeSnapshot, *, pretty: bool = False) -> bytes:
    """Serialize snapshot to UTF-8 JSON bytes."""
    option = orjson.OPT_INDENT_2 if pretty else 0
    return orjson.dumps(snapshot.as_dict(), option=option)


__all__ = [
    "ClockSnapshot",
    "TimeSnapshot",
    "dumps_snapshot",
    "snapshot_clock",
    "snapshot_time",
]
