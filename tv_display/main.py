from __future__ import annotations

import signal
import sys
from functools import partial
from pathlib import Path

from tv_display.config.loader import load_app_config, resolve_config_path
from tv_display.core.time_utils import now_in_timezone
from tv_display.data_feed.dashboard_client import DashboardClient
from tv_display.rotation.rotation_engine import DisplayRotationEngine
from tv_display.rotation.runner import DisplayRunner
from tv_display.telemetry import configure_logging
from tv_display.telemetry.storage import TelemetryStorage, default_storage


def main() -> None:
    project_root = Path(__file__).resolve().parents[1]
    config_path = resolve_config_path(project_root / "config" / "display.yml")
    config = load_app_config(config_path)

    logs_root = (project_root / config.telemetry.logs_dir).resolve()
    logger = configure_logging(
        log_dir=logs_root,
        telemetry=config.telemetry,
        tz_name=config.display.timezone,
    )
    logger.info(
        "Bootstrapping display",
        extra={"dashboard": config.dashboard.base_url, "timezone": config.display.timezone},
    )

    telemetry: TelemetryStorage | None = default_storage(logs_root) if config.telemetry.record_transitions else None
    client = DashboardClient(config.dashboard)
    engine = DisplayRotationEngine(
        clock=partial(now_in_timezone, config.display.timezone),
        clock_tick_sec=config.polling.tick_sec,
    )
    runner = DisplayRunner(
        engine,
        client,
        config.polling,
        telemetry=telemetry,
        logger=logger.getChild("runner"),
    )

    def _request_stop(signum: int, _: object) -> None:
        logger.info("Received signal", extra={"signal": signum})
        runner.stop()

    signal.signal(signal.SIGINT, _request_stop)
    signal.signal(signal.SIGTERM, _request_stop)

    try:
        runner.run()
    except KeyboardInterrupt:  # pragma: no cover - manual exit
        logger.info("Interrupted by user")
    finally:
        runner.stop()
        client.close()
        logger.info("Shutdown complete")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - top-level safety
        print(f"Fatal error: {exc}", file=sys.stderr)
        raise
