"""Public fixed-step system contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tickclock.runtime.time import Time


class FixedStepSystem(Protocol):
    """Lifecycle contract for logic that runs once per fixed period."""

    def start(self, time: "Time") -> None:
        """Initialize system resources."""

    def update(self, time: "Time") -> None:
        """Run one fixed step; ``time.delta()`` equals the fixed period."""

    def shutdown(self, time: "Time") -> None:
        """Release system resources."""


@dataclass(frozen=True, slots=True)
class SystemSpec:
    """System registration entry for fixed-step ordering."""

    system_id: str
    system: FixedStepSystem
    order: int = 0


class FixedStepConsumer(Protocol):
    """Ordered fixed-step runner contract."""

    def add_system(self, spec: SystemSpec) -> None:
        """Register system for lifecycle execution."""

    def start(self, time: "Time") -> None:
        """Start systems in order."""

    def run(self, time: "Time") -> int:
        """Drain the fixed accumulator and return number of steps executed."""

    def shutdown(self, time: "Time") -> None:
        """Shutdown started systems in reverse order."""


def create_fixed_step_runner(*, warn_steps_per_tick: int | None = None) -> FixedStepConsumer:
    """Create default fixed-step runner implementation."""
    from tickclock.runtime.fixed_step import DEFAULT_WARN_STEPS_PER_TICK, FixedStepRunner

    return FixedStepRunner(
        warn_steps_per_tick=(
            DEFAULT_WARN_STEPS_PER_TICK if warn_steps_per_tick is None else warn_steps_per_tick
        )
    )
