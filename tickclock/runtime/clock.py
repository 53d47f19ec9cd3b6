"""Single time track with delta, elapsed and wrapped-elapsed views."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

import numpy as np

from tickclock.runtime.duration import Duration

DEFAULT_WRAP_SECONDS = 3600


@dataclass(slots=True)
class Clock:
    """Accumulates increments into elapsed totals.

    Seconds views come in ``numpy.float32`` and ``float`` flavors. The wrapped
    views are derived from ``elapsed % wrap_seconds`` computed on integer
    nanoseconds, so their float32 form keeps full precision no matter how long
    the clock has been running.
    """

    wrap_seconds: int = DEFAULT_WRAP_SECONDS
    delta: Duration = Duration.ZERO
    delta_seconds: np.float32 = field(default_factory=lambda: np.float32(0.0))
    delta_seconds_f64: float = 0.0
    elapsed: Duration = Duration.ZERO
    elapsed_seconds: np.float32 = field(default_factory=lambda: np.float32(0.0))
    elapsed_seconds_f64: float = 0.0
    elapsed_wrapped: Duration = Duration.ZERO
    elapsed_seconds_wrapped: np.float32 = field(default_factory=lambda: np.float32(0.0))
    elapsed_seconds_wrapped_f64: float = 0.0

    def advance_by(self, delta: Duration) -> None:
        """Record ``delta`` as the latest increment and add it to elapsed."""
        self.delta = delta
        self.delta_seconds = delta.as_secs_f32()
        self.delta_seconds_f64 = delta.as_secs_f64()
        self.elapsed = self.elapsed + delta
        self.elapsed_seconds = self.elapsed.as_secs_f32()
        self.elapsed_seconds_f64 = self.elapsed.as_secs_f64()
        self.elapsed_wrapped = self.elapsed % Duration.from_secs(self.wrap_seconds)
        self.elapsed_seconds_wrapped = self.elapsed_wrapped.as_secs_f32()
        self.elapsed_seconds_wrapped_f64 = self.elapsed_wrapped.as_secs_f64()

    def copy(self) -> Clock:
        """Return an independent value copy."""
        return replace(self)


__all__ = ["Clock", "DEFAULT_WRAP_SECONDS"]
