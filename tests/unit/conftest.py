from __future__ import annotations

import pytest

from tickclock.runtime.duration import Duration, Instant


class ManualTimeSource:
    """Time source that only moves when told to."""

    def __init__(self, start_ns: int = 1_000_000_000) -> None:
        self.now = Instant(start_ns)
        self.calls = 0

    def __call__(self) -> Instant:
        self.calls += 1
        return self.now

    def advance(self, duration: Duration) -> Instant:
        self.now = self.now + duration
        return self.now


@pytest.fixture
def manual_source() -> ManualTimeSource:
    return ManualTimeSource()


@pytest.fixture
def startup() -> Instant:
    return Instant(5_000_000_000)
