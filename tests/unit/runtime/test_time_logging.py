from __future__ import annotations

import json
import logging

import pytest

from tickclock.runtime.config import TimeConfig, set_time_config
from tickclock.runtime.duration import Duration, Instant
from tickclock.runtime.logging import (
    LOGGER_NAMESPACE,
    JsonFormatter,
    TimeRecordFilter,
    configure_logging,
    logging_config_from_time_config,
    setup_logging,
)
from tickclock.runtime.time import Time


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    namespace = logging.getLogger(LOGGER_NAMESPACE)
    original_handlers = list(root.handlers)
    original_level = root.level
    original_namespace_level = namespace.level
    yield root
    root.handlers.clear()
    root.handlers.extend(original_handlers)
    root.setLevel(original_level)
    namespace.setLevel(original_namespace_level)


def _record(message: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord(
        name="tickclock.time",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=args,
        exc_info=None,
    )


def test_setup_logging_uses_time_config_level(restore_logging) -> None:
    root = restore_logging
    root.handlers.clear()
    root.setLevel(logging.WARNING)

    setup_logging(TimeConfig(log_level="DEBUG"))

    assert root.handlers
    assert root.level == logging.WARNING
    assert logging.getLogger(LOGGER_NAMESPACE).level == logging.DEBUG
    assert logging.getLogger("tickclock.time").isEnabledFor(logging.DEBUG)


def test_setup_logging_defaults_to_active_time_config(restore_logging) -> None:
    root = restore_logging
    root.handlers.clear()
    try:
        set_time_config(TimeConfig(log_level="ERROR"))
        setup_logging()
    finally:
        set_time_config(TimeConfig())

    assert logging.getLogger(LOGGER_NAMESPACE).level == logging.ERROR


def test_setup_logging_keeps_existing_handlers(restore_logging) -> None:
    root = restore_logging
    sentinel = logging.NullHandler()
    root.handlers.clear()
    root.addHandler(sentinel)
    root.setLevel(logging.WARNING)

    setup_logging(TimeConfig(log_level="INFO"))

    assert root.handlers == [sentinel]
    assert root.level == logging.WARNING
    assert logging.getLogger(LOGGER_NAMESPACE).level == logging.INFO


def test_unknown_level_name_falls_back_to_info(restore_logging) -> None:
    restore_logging.handlers.clear()

    configure_logging(logging_config_from_time_config(TimeConfig(log_level="chatty")))

    assert logging.getLogger(LOGGER_NAMESPACE).level == logging.INFO


def test_json_formatter_preserves_extra_fields() -> None:
    record = _record("time_tick index=%d", 3)
    record.fixed_steps = 2

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "tickclock.time"
    assert payload["msg"] == "time_tick index=3"
    assert payload["fields"] == {"fixed_steps": 2}


def test_time_record_filter_stamps_current_readings(startup: Instant) -> None:
    time = Time(startup)
    time.update_with_instant(startup)
    time.update_with_instant(startup + Duration.from_millis(40))
    time.pause()
    record = _record("time_paused")

    assert TimeRecordFilter(time).filter(record) is True

    payload = json.loads(JsonFormatter().format(record))
    assert payload["fields"] == {
        "time_elapsed_ns": 40_000_000,
        "time_delta_ns": 40_000_000,
        "time_raw_elapsed_ns": 40_000_000,
        "time_paused": True,
    }


def test_configure_logging_writes_time_stamped_json_file(
    tmp_path, startup: Instant, restore_logging
) -> None:
    time = Time(startup)
    time.update_with_instant(startup + Duration.from_millis(10))
    log_path = tmp_path / "logs" / "time.jsonl"
    config = logging_config_from_time_config(
        TimeConfig(log_level="info"), file_path=str(log_path)
    )

    configure_logging(config, time=time)
    logging.getLogger("tickclock.test").info("time_checkpoint")
    for handler in restore_logging.handlers:
        handler.flush()

    lines = log_path.read_text(encoding="utf-8").splitlines()
    payload = json.loads(lines[-1])
    assert payload["msg"] == "time_checkpoint"
    assert payload["fields"]["time_elapsed_ns"] == 10_000_000
    assert payload["fields"]["time_paused"] is False
    for handler in restore_logging.handlers:
        handler.close()
