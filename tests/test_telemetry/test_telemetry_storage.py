from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from tv_display.config.models import TelemetryConfig
from tv_display.telemetry.events import TelemetryEvent
from tv_display.telemetry.logging_setup import LOG_FILE_NAME, JsonFormatter, configure_logging
from tv_display.telemetry.storage import TelemetryStorage, default_storage


def test_telemetry_storage_should_append_events(tmp_path) -> None:
    storage = TelemetryStorage(logs_dir=tmp_path / "events")
    event = TelemetryEvent(
        timestamp=datetime(2026, 10, 19, tzinfo=timezone.utc),
        event_type="display_transition",
        payload={"from": "rates", "to": "media"},
        context={"current_media_index": 0},
    )
    storage.append_event(event)
    path = storage.append_event(event)

    assert path.name == "display_20261019.jsonl"
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    saved = json.loads(lines[-1])
    assert saved["event_type"] == "display_transition"
    assert saved["timestamp"] == "2026-10-19T00:00:00+00:00"
    assert saved["payload"]["to"] == "media"


def test_default_storage_should_root_events_under_base_dir(tmp_path) -> None:
    storage = default_storage(tmp_path)
    assert storage.logs_dir == tmp_path / "events"
    assert storage.logs_dir.is_dir()


def test_json_formatter_should_include_extra_fields() -> None:
    record = logging.LogRecord("tv_display.runner", logging.INFO, __file__, 1, "Display mode changed", None, None)
    record.to = "media"
    record.unserializable = object()

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Display mode changed"
    assert payload["level"] == "INFO"
    assert payload["to"] == "media"
    assert "unserializable" not in payload
    assert "lineno" not in payload


def test_json_formatter_should_stamp_shop_local_time() -> None:
    record = logging.LogRecord("tv_display", logging.INFO, __file__, 1, "tick", None, None)
    record.created = 0.0

    payload = json.loads(JsonFormatter("Asia/Kolkata").format(record))

    assert payload["timestamp"] == "1970-01-01T05:30:00+05:30"


def test_configure_logging_should_write_json_lines(tmp_path) -> None:
    telemetry = TelemetryConfig(log_level="info", console=False)
    logger = configure_logging(log_dir=tmp_path, telemetry=telemetry, logger_name="tv_display_test")
    assert len(logger.handlers) == 1

    logger.info("hello", extra={"source": "rates"})
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / LOG_FILE_NAME).read_text(encoding="utf-8").strip().splitlines()
    payload = json.loads(lines[-1])
    assert payload["message"] == "hello"
    assert payload["source"] == "rates"
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


def test_configure_logging_should_replace_previous_handlers(tmp_path) -> None:
    logger = configure_logging(log_dir=tmp_path, logger_name="tv_display_reconfigured")
    configure_logging(log_dir=tmp_path, logger_name="tv_display_reconfigured")

    assert len(logger.handlers) == 2
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
