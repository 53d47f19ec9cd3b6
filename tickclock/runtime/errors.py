"""Timekeeping precondition errors."""

from __future__ import annotations


class TimeError(Exception):
    """Base class for rejected timekeeping operations."""


class NegativeDurationError(TimeError, ValueError):
    """Raised when a duration would be negative or instants arrive out of order."""


class WrapPeriodError(TimeError, ValueError):
    """Raised for an unusable elapsed-time wrap period."""


class ZeroWrapPeriodError(WrapPeriodError):
    """Raised when the wrap period is zero-length (division by zero)."""


class NonIntegralWrapPeriodError(WrapPeriodError):
    """Raised when the wrap period carries a sub-second remainder."""


class InvalidRelativeSpeedError(TimeError, ValueError):
    """Raised when a relative speed is negative or not finite."""


class InvalidFixedPeriodError(TimeError, ValueError):
    """Raised when the fixed-step period is zero-length."""


__all__ = [
    "InvalidFixedPeriodError",
    "InvalidRelativeSpeedError",
    "NegativeDurationError",
    "NonIntegralWrapPeriodError",
    "TimeError",
    "WrapPeriodError",
    "ZeroWrapPeriodError",
]
