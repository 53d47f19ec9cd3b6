"""Integer-nanosecond duration and monotonic instant value types."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from time import monotonic_ns
from typing import ClassVar

import numpy as np

from tickclock.runtime.errors import NegativeDurationError

NANOS_PER_SEC = 1_000_000_000
NANOS_PER_MILLI = 1_000_000
NANOS_PER_MICRO = 1_000


@dataclass(frozen=True, slots=True, order=True)
class Duration:
    """Non-negative span of time with nanosecond resolution."""

    ZERO: ClassVar[Duration]

    nanos: int = 0

    def __post_init__(self) -> None:
        if self.nanos < 0:
            raise NegativeDurationError(f"duration must be >= 0 ns, got {self.nanos}")

    @classmethod
    def from_secs(cls, secs: int) -> Duration:
        return cls(int(secs) * NANOS_PER_SEC)

    @classmethod
    def from_millis(cls, millis: int) -> Duration:
        return cls(int(millis) * NANOS_PER_MILLI)

    @classmethod
    def from_micros(cls, micros: int) -> Duration:
        return cls(int(micros) * NANOS_PER_MICRO)

    @classmethod
    def from_nanos(cls, nanos: int) -> Duration:
        return cls(int(nanos))

    @classmethod
    def from_secs_f64(cls, secs: float) -> Duration:
        """Convert float seconds, rounding to the nearest nanosecond."""
        value = float(secs)
        if not math.isfinite(value):
            raise ValueError(f"cannot convert non-finite seconds to Duration: {value}")
        if value < 0.0:
            raise NegativeDurationError(f"cannot convert negative seconds to Duration: {value}")
        return cls(round(value * NANOS_PER_SEC))

    @classmethod
    def from_secs_f32(cls, secs: float) -> Duration:
        return cls.from_secs_f64(float(np.float32(secs)))

    def as_secs(self) -> int:
        """Whole seconds, truncating the sub-second part."""
        return self.nanos // NANOS_PER_SEC

    def subsec_nanos(self) -> int:
        return self.nanos % NANOS_PER_SEC

    def as_secs_f64(self) -> float:
        return self.nanos / NANOS_PER_SEC

    def as_secs_f32(self) -> np.float32:
        return np.float32(self.as_secs_f64())

    def is_zero(self) -> bool:
        return self.nanos == 0

    def checked_sub(self, other: Duration) -> Duration | None:
        """Return ``self - other`` or ``None`` when the result would be negative."""
        remaining = self.nanos - other.nanos
        if remaining < 0:
            return None
        return Duration(remaining)

    def mul_f64(self, ratio: float) -> Duration:
        """Scale by ``ratio``, rounding to the nearest nanosecond."""
        scaled = self.nanos * float(ratio)
        if not math.isfinite(scaled):
            raise ValueError(f"cannot scale Duration by non-finite ratio: {ratio}")
        return Duration(round(scaled))

    def mul_f32(self, ratio: float) -> Duration:
        return self.mul_f64(float(np.float32(ratio)))

    def __add__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.nanos + other.nanos)

    def __sub__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.nanos - other.nanos)

    def __mul__(self, count: int) -> Duration:
        if not isinstance(count, int):
            return NotImplemented
        return Duration(self.nanos * count)

    __rmul__ = __mul__

    def __floordiv__(self, other: Duration) -> int:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.nanos // other.nanos

    def __mod__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.nanos % other.nanos)


Duration.ZERO = Duration(0)


@dataclass(frozen=True, slots=True, order=True)
class Instant:
    """Opaque monotonic timestamp, comparable and subtractable."""

    nanos: int

    @classmethod
    def now(cls, source: Callable[[], int] | None = None) -> Instant:
        """Sample the monotonic clock, or ``source`` when one is injected."""
        reader = source or monotonic_ns
        return cls(int(reader()))

    def duration_since(self, earlier: Instant) -> Duration:
        gap = self.nanos - earlier.nanos
        if gap < 0:
            raise NegativeDurationError(
                f"instant {self.nanos} is {-gap} ns earlier than {earlier.nanos}"
            )
        return Duration(gap)

    def __add__(self, other: Duration) -> Instant:
        if not isinstance(other, Duration):
            return NotImplemented
        return Instant(self.nanos + other.nanos)

    def __sub__(self, other: Instant | Duration) -> Duration | Instant:
        if isinstance(other, Instant):
            return self.duration_since(other)
        if isinstance(other, Duration):
            return Instant(self.nanos - other.nanos)
        return NotImplemented


TimeSource = Callable[[], Instant]

__all__ = [
    "Duration",
    "Instant",
    "NANOS_PER_MICRO",
    "NANOS_PER_MILLI",
    "NANOS_PER_SEC",
    "TimeSource",
]
