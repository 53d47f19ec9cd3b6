"""Logging setup for timekeeping hosts.

Levels are applied to the ``tickclock`` logger namespace only, so a host's
own root level is left alone. When a Time is supplied, every record passing
the installed handlers is stamped with the Time's current readings.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

import orjson

from tickclock.api.logging import LoggingConfig
from tickclock.runtime.config import TimeConfig, get_time_config
from tickclock.runtime.time import Time

LOGGER_NAMESPACE = "tickclock"

_STANDARD_RECORD_FIELDS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class TimeRecordFilter(logging.Filter):
    """Adds the owning Time's readings to each record as ``extra`` fields."""

    def __init__(self, time: Time) -> None:
        super().__init__()
        self._time = time

    def filter(self, record: logging.LogRecord) -> bool:
        record.time_elapsed_ns = self._time.elapsed().nanos
        record.time_delta_ns = self._time.delta().nanos
        record.time_raw_elapsed_ns = self._time.raw_elapsed().nanos
        record.time_paused = self._time.is_paused()
        return True


class JsonFormatter(logging.Formatter):
    """JSON formatter with extra-field preservation."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS}
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=str).decode("utf-8")


def logging_config_from_time_config(
    config: TimeConfig,
    *,
    console_format: str = "text",
    file_path: str | None = None,
    file_format: str = "json",
) -> LoggingConfig:
    """Build handler settings whose level comes from ``config.log_level``."""
    return LoggingConfig(
        level_name=config.log_level,
        console_format=console_format,
        file_path=file_path,
        file_format=file_format,
    )


def configure_logging(config: LoggingConfig, *, time: Time | None = None) -> None:
    """Replace root handlers and set the ``tickclock`` namespace level."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    handlers[0].setFormatter(_resolve_formatter(config.console_format))
    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        handlers.append(file_handler)
    if time is not None:
        time_filter = TimeRecordFilter(time)
        for handler in handlers:
            handler.addFilter(time_filter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    for handler in handlers:
        root.addHandler(handler)
    _apply_namespace_level(config.level_name)


def setup_logging(config: TimeConfig | None = None, *, time: Time | None = None) -> None:
    """Configure minimal logging from the active TimeConfig.

    Existing root handlers are kept; only the namespace level is applied then.
    """
    resolved = config if config is not None else get_time_config()
    if logging.getLogger().handlers:
        _apply_namespace_level(resolved.log_level)
        return
    configure_logging(logging_config_from_time_config(resolved), time=time)


def _apply_namespace_level(level_name: str) -> None:
    level = logging.getLevelName(level_name.strip().upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.getLogger(LOGGER_NAMESPACE).setLevel(level)


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")


__all__ = [
    "JsonFormatter",
    "LOGGER_NAMESPACE",
    "TimeRecordFilter",
    "configure_logging",
    "logging_config_from_time_config",
    "setup_logging",
]
