"""JSON logging for the display process.

Lines carry the shop-local timestamp so they can be read against what the TV
showed at the time. Structured context passed through ``extra=`` (poll source,
display mode, media item) is emitted as top-level keys.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime
from logging import Handler, Logger
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List

from tv_display.config.models import TelemetryConfig
from tv_display.core.time_utils import get_app_timezone

LOG_FILE_NAME = "display_current.jsonl"

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, timestamped in the display timezone."""

    def __init__(self, tz_name: str | None = None) -> None:
        super().__init__()
        self._tz = get_app_timezone(tz_name)

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=self._tz).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        payload.update(self._context(record, payload))
        return json.dumps(payload, ensure_ascii=False)

    @staticmethod
    def _context(record: logging.LogRecord, taken: Dict[str, Any]) -> Dict[str, Any]:
        context: Dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _STANDARD_ATTRS or key in taken:
                continue
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                continue
            context[key] = value
        return context


def _build_handlers(log_dir: Path, telemetry: TelemetryConfig) -> List[Handler]:
    log_dir.mkdir(parents=True, exist_ok=True)
    handlers: List[Handler] = [
        TimedRotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            when="midnight",
            backupCount=telemetry.log_backup_days,
            encoding="utf-8",
        )
    ]
    if telemetry.console:
        handlers.append(logging.StreamHandler())
    return handlers


def configure_logging(
    *,
    log_dir: Path,
    telemetry: TelemetryConfig | None = None,
    tz_name: str | None = None,
    logger_name: str = "tv_display",
) -> Logger:
    """Route the package logger to a daily rotating JSON file (and stderr).

    Calling it again replaces the handlers installed by the previous call.
    """

    telemetry = telemetry or TelemetryConfig()
    formatter = JsonFormatter(tz_name)
    logger = logging.getLogger(logger_name)
    logger.setLevel(telemetry.log_level.upper())
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    for handler in _build_handlers(log_dir, telemetry):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    logger.debug("JSON logging configured", extra={"log_file": str(log_dir / LOG_FILE_NAME)})
    return logger


__all__ = ["JsonFormatter", "LOG_FILE_NAME", "configure_logging"]
