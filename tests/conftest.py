"""Test configuration and fixtures."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from repo_bootstrap.bootstrap.github.client import GitHubClient
from repo_bootstrap.bootstrap.repositories import RepositoryRef

_SETTINGS_ENV = (
    "GH_EXECUTABLE",
    "GITHUB_HOSTNAME",
    "GITHUB_BASE_URL",
    "GITHUB_WEB_URL",
    "LOG_LEVEL",
    "BOOTSTRAP_FORCE_LOGIN",
    "BOOTSTRAP_FORK_WAIT_SECONDS",
    "BOOTSTRAP_ISSUE_DELAY_SECONDS",
    "BOOTSTRAP_SNAPSHOT_DIR",
)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment and any local `.env` out of the tests."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture
def mock_github() -> Mock:
    """Provide a GitHub client double."""
    return Mock(spec=GitHubClient)


@pytest.fixture
def source() -> RepositoryRef:
    return RepositoryRef(owner="codepath", name="scalar")


@pytest.fixture
def fork() -> RepositoryRef:
    return RepositoryRef(owner="octocat", name="scalar")


@pytest.fixture
def snapshot_dir(tmp_path: Path) -> Path:
    """Provide a directory for issue snapshots."""
    path = tmp_path / "snapshots"
    path.mkdir()
    return path
