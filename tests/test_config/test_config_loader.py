from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import ValidationError

from tv_display.config.loader import BASE_URL_ENV, CONFIG_PATH_ENV, load_app_config, resolve_config_path


def _write_yaml(path: Path, content: str) -> Path:
    path.write_text(dedent(content), encoding="utf-8")
    return path


def test_load_app_config_should_parse_valid_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(BASE_URL_ENV, raising=False)
    path = _write_yaml(
        tmp_path / "display.yml",
        """
        dashboard:
          base_url: http://shop.local:5000/
          max_retries: 5
        polling:
          media_interval_sec: 10
          tick_sec: 0.5
        display:
          timezone: Asia/Kolkata
        telemetry:
          log_level: DEBUG
          logs_dir: var/logs
        """,
    )
    config = load_app_config(path)
    assert config.dashboard.base_url == "http://shop.local:5000"
    assert config.dashboard.max_retries == 5
    assert config.polling.media_interval_sec == 10
    assert config.polling.rates_interval_sec == 30
    assert config.polling.tick_sec == 0.5
    assert config.telemetry.logs_dir == "var/logs"


def test_load_app_config_should_accept_blank_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(BASE_URL_ENV, raising=False)
    config = load_app_config(_write_yaml(tmp_path / "display.yml", ""))
    assert config.dashboard.base_url == "http://localhost:5000"
    assert config.display.timezone == "Asia/Kolkata"


def test_load_app_config_should_honor_base_url_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(BASE_URL_ENV, "http://10.0.0.5:8080")
    path = _write_yaml(tmp_path / "display.yml", "dashboard:\n  timeout_sec: 2\n")
    config = load_app_config(path)
    assert config.dashboard.base_url == "http://10.0.0.5:8080"
    assert config.dashboard.timeout_sec == 2


def test_load_app_config_should_reject_missing_and_invalid_files(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_app_config(tmp_path / "missing.yml")
    with pytest.raises(ValueError):
        load_app_config(_write_yaml(tmp_path / "list.yml", "- a\n- b\n"))
    with pytest.raises(ValidationError):
        load_app_config(_write_yaml(tmp_path / "bad.yml", "polling:\n  rates_interval_sec: 0\n"))


def test_resolve_config_path_should_prefer_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    assert resolve_config_path(tmp_path / "display.yml") == tmp_path / "display.yml"
    monkeypatch.setenv(CONFIG_PATH_ENV, str(tmp_path / "other.yml"))
    assert resolve_config_path(tmp_path / "display.yml") == tmp_path / "other.yml"
