"""Unit tests for configuration."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from repo_bootstrap.bootstrap.config import BootstrapSettings


def test_settings_defaults() -> None:
    settings = BootstrapSettings()

    assert settings.gh_executable == "gh"
    assert settings.github_hostname == "github.com"
    assert settings.github_base_url == "https://api.github.com"
    assert settings.github_web_url == "https://github.com"
    assert settings.log_level == "WARNING"
    assert settings.force_login is True
    assert settings.fork_wait_seconds == 2.0
    assert settings.issue_delay_seconds == 1.0
    assert settings.snapshot_dir is None


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GITHUB_BASE_URL", "https://github.example.com/api/v3/")
    monkeypatch.setenv("GITHUB_WEB_URL", "https://github.example.com/")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("BOOTSTRAP_FORCE_LOGIN", "false")
    monkeypatch.setenv("BOOTSTRAP_ISSUE_DELAY_SECONDS", "0")
    monkeypatch.setenv("BOOTSTRAP_SNAPSHOT_DIR", str(tmp_path))

    settings = BootstrapSettings()

    assert settings.github_base_url == "https://github.example.com/api/v3"
    assert settings.github_web_url == "https://github.example.com"
    assert settings.log_level == "DEBUG"
    assert settings.force_login is False
    assert settings.issue_delay_seconds == 0
    assert settings.snapshot_dir == tmp_path


def test_settings_from_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text("GH_EXECUTABLE=/opt/gh/bin/gh\nUNRELATED=1\n", encoding="utf-8")

    settings = BootstrapSettings(_env_file=env_file)

    assert settings.gh_executable == "/opt/gh/bin/gh"


def test_negative_delay_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BOOTSTRAP_ISSUE_DELAY_SECONDS", "-1")

    with pytest.raises(ValidationError):
        BootstrapSettings()


def test_unknown_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError):
        BootstrapSettings()
