"""Fixed-step consumer that drains a Time accumulator into system ticks."""

from __future__ import annotations

import logging
from time import perf_counter

from tickclock.api.fixed_step import SystemSpec
from tickclock.runtime.time import Time

_LOG = logging.getLogger("tickclock.fixed_step")

DEFAULT_WARN_STEPS_PER_TICK = 8


class FixedStepRunner:
    """Ordered fixed-step system runner.

    Systems read ``time.delta()`` during their update and see exactly one
    fixed period, because ``expend_fixed`` switches the current clock to the
    fixed clock for the duration of the step.
    """

    def __init__(self, *, warn_steps_per_tick: int = DEFAULT_WARN_STEPS_PER_TICK) -> None:
        if warn_steps_per_tick <= 0:
            raise ValueError("warn_steps_per_tick must be > 0")
        self._systems: list[SystemSpec] = []
        self._started_ids: set[str] = set()
        self._cached_order: tuple[SystemSpec, ...] | None = None
        self._warn_steps_per_tick = warn_steps_per_tick

    def add_system(self, spec: SystemSpec) -> None:
        """Register system spec."""
        normalized_id = spec.system_id.strip()
        if not normalized_id:
            raise ValueError("system_id must not be empty")
        if any(existing.system_id == normalized_id for existing in self._systems):
            raise ValueError(f"duplicate system_id: {normalized_id}")
        self._systems.append(
            SystemSpec(system_id=normalized_id, system=spec.system, order=spec.order)
        )
        self._cached_order = None

    def start(self, time: Time) -> None:
        """Start systems in ascending order."""
        for spec in self._ordered_systems():
            if spec.system_id in self._started_ids:
                continue
            spec.system.start(time)
            self._started_ids.add(spec.system_id)

    def run(self, time: Time) -> int:
        """Expend every whole fixed period available and return the step count."""
        ordered = self._ordered_systems()
        system_timings_ms: dict[str, float] = {}
        step_count = 0
        while time.expend_fixed():
            step_count += 1
            for spec in ordered:
                if spec.system_id not in self._started_ids:
                    continue
                started_at = perf_counter()
                caught_exc: Exception | None = None
                try:
                    spec.system.update(time)
                except Exception as exc:
                    caught_exc = exc
                finally:
                    elapsed_ms = (perf_counter() - started_at) * 1000.0
                    system_timings_ms[spec.system_id] = (
                        system_timings_ms.get(spec.system_id, 0.0) + elapsed_ms
                    )
                if caught_exc is not None:
                    _LOG.error(
                        "fixed_step_system_failed system=%s step=%d",
                        spec.system_id,
                        step_count,
                    )
                    self._log_system_timings(
                        step_count=step_count, timings_ms=system_timings_ms
                    )
                    raise caught_exc
        if step_count > self._warn_steps_per_tick:
            _LOG.warning(
                "fixed_step_backlog steps=%d threshold=%d period_ns=%d",
                step_count,
                self._warn_steps_per_tick,
                time.fixed_period().nanos,
            )
        self._log_system_timings(step_count=step_count, timings_ms=system_timings_ms)
        return step_count

    def shutdown(self, time: Time) -> None:
        """Shutdown started systems in reverse order."""
        for spec in reversed(self._ordered_systems()):
            if spec.system_id not in self._started_ids:
                continue
            spec.system.shutdown(time)
            self._started_ids.remove(spec.system_id)

    def _ordered_systems(self) -> tuple[SystemSpec, ...]:
        if self._cached_order is not None:
            return self._cached_order
        self._cached_order = tuple(
            sorted(
                self._systems,
                key=lambda item: (item.order, item.system_id),
            )
        )
        return self._cached_order

    @staticmethod
    def _log_system_timings(*, step_count: int, timings_ms: dict[str, float]) -> None:
        if not timings_ms or not _LOG.isEnabledFor(logging.DEBUG):
            return
        top = sorted(timings_ms.items(), key=lambda item: item[1], reverse=True)[:3]
        top_text = ", ".join(f"{system_id}={elapsed_ms:.3f}ms" for system_id, elapsed_ms in top)
        _LOG.debug("fixed_step_timing step_count=%d systems=%s", step_count, top_text)


__all__ = ["DEFAULT_WARN_STEPS_PER_TICK", "FixedStepRunner"]
