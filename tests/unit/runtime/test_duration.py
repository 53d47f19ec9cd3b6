from __future__ import annotations

import math

import numpy as np
import pytest

from tickclock.runtime.duration import Duration, Instant
from tickclock.runtime.errors import NegativeDurationError


def test_duration_constructors_agree_on_nanoseconds() -> None:
    assert Duration.from_secs(2).nanos == 2_000_000_000
    assert Duration.from_millis(333).nanos == 333_000_000
    assert Duration.from_micros(5).nanos == 5_000
    assert Duration.from_nanos(7).nanos == 7
    assert Duration.from_secs_f64(1.0 / 60.0).nanos == 16_666_667
    assert Duration.from_secs_f32(0.5) == Duration.from_millis(500)
    assert Duration.ZERO.is_zero()


def test_duration_rejects_negative_and_non_finite_values() -> None:
    with pytest.raises(NegativeDurationError):
        Duration(-1)
    with pytest.raises(NegativeDurationError):
        Duration.from_secs_f64(-0.5)
    with pytest.raises(ValueError):
        Duration.from_secs_f64(math.inf)
    with pytest.raises(NegativeDurationError):
        Duration.from_millis(1) - Duration.from_millis(2)


def test_duration_readers_split_whole_and_fractional_seconds() -> None:
    value = Duration.from_millis(2_750)

    assert value.as_secs() == 2
    assert value.subsec_nanos() == 750_000_000
    assert value.as_secs_f64() == 2.75
    assert value.as_secs_f32() == np.float32(2.75)
    assert isinstance(value.as_secs_f32(), np.float32)


def test_duration_arithmetic() -> None:
    ten = Duration.from_millis(10)
    three = Duration.from_millis(3)

    assert ten + three == Duration.from_millis(13)
    assert ten - three == Duration.from_millis(7)
    assert ten % three == Duration.from_millis(1)
    assert ten // three == 3
    assert three * 4 == Duration.from_millis(12)
    assert 4 * three == Duration.from_millis(12)
    assert ten.checked_sub(three) == Duration.from_millis(7)
    assert three.checked_sub(ten) is None
    assert min(ten, three) == three


def test_duration_scaling_rounds_to_nearest_nanosecond() -> None:
    assert Duration.from_secs(1).mul_f64(2.0) == Duration.from_secs(2)
    assert Duration.from_nanos(3).mul_f64(0.5) == Duration.from_nanos(2)
    assert Duration.from_millis(30).mul_f64(0.5) == Duration.from_millis(15)
    assert Duration.from_secs(1).mul_f32(2.0) == Duration.from_secs(2)
    with pytest.raises(ValueError):
        Duration.from_secs(1).mul_f64(math.nan)


def test_instant_subtraction_and_offsets() -> None:
    earlier = Instant(1_000)
    later = earlier + Duration.from_nanos(500)

    assert later - earlier == Duration.from_nanos(500)
    assert later.duration_since(earlier) == Duration.from_nanos(500)
    assert later - Duration.from_nanos(500) == earlier
    assert earlier < later


def test_instant_out_of_order_subtraction_is_rejected() -> None:
    with pytest.raises(NegativeDurationError):
        _ = Instant(10) - Instant(20)


def test_instant_now_uses_injected_source() -> None:
    assert Instant.now(lambda: 42) == Instant(42)
    assert isinstance(Instant.now(), Instant)
