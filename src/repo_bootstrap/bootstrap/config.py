"""Configuration for the bootstrap run.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

No token is configured here: authentication goes through the GitHub CLI login
flow and the token is read back from `gh auth token`.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class BootstrapSettings(BaseSettings):
    """Settings for the fork-and-replicate run.

    Environment variables:
    - GH_EXECUTABLE                  (optional)
    - GITHUB_HOSTNAME                (optional)
    - GITHUB_BASE_URL                (optional)
    - GITHUB_WEB_URL                 (optional)
    - LOG_LEVEL                      (optional)
    - BOOTSTRAP_FORCE_LOGIN          (optional)
    - BOOTSTRAP_FORK_WAIT_SECONDS    (optional)
    - BOOTSTRAP_ISSUE_DELAY_SECONDS  (optional)
    - BOOTSTRAP_SNAPSHOT_DIR         (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `BootstrapSettings(_env_file=path_to_env)`.
    """

    gh_executable: str = Field(
        default="gh",
        validation_alias="GH_EXECUTABLE",
        description="Name or path of the GitHub CLI executable",
    )
    github_hostname: str = Field(
        default="github.com",
        validation_alias="GITHUB_HOSTNAME",
        description="Hostname passed to `gh auth` commands",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    github_web_url: str = Field(
        default="https://github.com",
        validation_alias="GITHUB_WEB_URL",
        description="GitHub web URL; created issue URLs must start with it",
    )

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    force_login: bool = Field(
        default=True,
        validation_alias="BOOTSTRAP_FORCE_LOGIN",
        description="Log out any existing gh session before logging in again",
    )

    fork_wait_seconds: float = Field(
        default=2.0,
        ge=0,
        validation_alias="BOOTSTRAP_FORK_WAIT_SECONDS",
        description="Pause after a new fork is requested so it can propagate",
    )
    issue_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        validation_alias="BOOTSTRAP_ISSUE_DELAY_SECONDS",
        description="Pause between issue creations (secondary rate limits)",
    )

    snapshot_dir: Path | None = Field(
        default=None,
        validation_alias="BOOTSTRAP_SNAPSHOT_DIR",
        description="Directory for the per-repository issue snapshot (system temp dir if unset)",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("github_base_url", "github_web_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("URL must be non-empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}")
        return normalized
