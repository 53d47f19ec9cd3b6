from __future__ import annotations

import numpy as np

from tickclock.runtime.clock import DEFAULT_WRAP_SECONDS, Clock
from tickclock.runtime.duration import Duration


def test_new_clock_starts_at_zero() -> None:
    clock = Clock()

    assert clock.wrap_seconds == DEFAULT_WRAP_SECONDS == 3600
    assert clock.delta == Duration.ZERO
    assert clock.elapsed == Duration.ZERO
    assert clock.elapsed_wrapped == Duration.ZERO
    assert clock.delta_seconds == 0.0
    assert clock.elapsed_seconds_f64 == 0.0
    assert clock.elapsed_seconds_wrapped == 0.0


def test_advance_by_updates_delta_and_elapsed_views() -> None:
    clock = Clock()
    clock.advance_by(Duration.from_millis(250))
    clock.advance_by(Duration.from_millis(500))

    assert clock.delta == Duration.from_millis(500)
    assert clock.delta_seconds == np.float32(0.5)
    assert clock.delta_seconds_f64 == 0.5
    assert clock.elapsed == Duration.from_millis(750)
    assert clock.elapsed_seconds == np.float32(0.75)
    assert clock.elapsed_seconds_f64 == 0.75


def test_advance_by_zero_keeps_elapsed_and_clears_delta() -> None:
    clock = Clock()
    clock.advance_by(Duration.from_secs(1))
    clock.advance_by(Duration.ZERO)

    assert clock.delta == Duration.ZERO
    assert clock.elapsed == Duration.from_secs(1)


def test_wrapped_elapsed_is_taken_modulo_wrap_seconds() -> None:
    clock = Clock(wrap_seconds=3)
    clock.advance_by(Duration.from_secs(2))
    clock.advance_by(Duration.from_secs(2))

    assert clock.elapsed == Duration.from_secs(4)
    assert clock.elapsed_wrapped == Duration.from_secs(1)
    assert clock.elapsed_seconds_wrapped == np.float32(1.0)
    assert clock.elapsed_seconds_wrapped_f64 == 1.0


def test_wrapped_float32_keeps_precision_when_elapsed_is_large() -> None:
    clock = Clock()
    clock.advance_by(Duration.from_secs(10_000_000) + Duration.from_millis(250))

    # float32 cannot hold the quarter second at this magnitude
    assert float(clock.elapsed_seconds) == 10_000_000.0
    assert clock.elapsed_wrapped == Duration.from_secs(2800) + Duration.from_millis(250)
    assert clock.elapsed_seconds_wrapped == np.float32(2800.25)


def test_wrap_change_applies_on_next_advance() -> None:
    clock = Clock()
    clock.advance_by(Duration.from_secs(5))
    clock.wrap_seconds = 2

    assert clock.elapsed_wrapped == Duration.from_secs(5)

    clock.advance_by(Duration.ZERO)
    assert clock.elapsed_wrapped == Duration.from_secs(1)


def test_copy_is_independent_of_source() -> None:
    clock = Clock()
    clock.advance_by(Duration.from_secs(1))
    snapshot = clock.copy()

    clock.advance_by(Duration.from_secs(1))

    assert snapshot.elapsed == Duration.from_secs(1)
    assert clock.elapsed == Duration.from_secs(2)
    assert snapshot is not clock
