"""Fork creation and fork settings."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import requests
from github import GithubException

from repo_bootstrap.bootstrap.github.client import GitHubClient
from repo_bootstrap.bootstrap.repositories import RepositoryRef

logger = logging.getLogger(__name__)

FORK_FAILURE_CAUSES = (
    "Repository doesn't exist or is private",
    "You don't have permission to fork it",
    "Network connectivity issues",
)


class ForkError(RuntimeError):
    """Raised when a fork can neither be found nor created."""

    def __init__(self, source: RepositoryRef, reason: str) -> None:
        super().__init__(f"Failed to fork {source.full_name}: {reason}")
        self.source = source
        self.reason = reason


@dataclass(frozen=True, slots=True)
class ForkOutcome:
    fork: RepositoryRef
    created: bool


class ForkService:
    def __init__(
        self,
        *,
        github: GitHubClient,
        fork_wait_seconds: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._github = github
        self._fork_wait_seconds = fork_wait_seconds
        self._sleep = sleep

    def ensure_fork(self, source: RepositoryRef, fork: RepositoryRef) -> ForkOutcome:
        """Reuse `fork` if it already exists, otherwise fork `source` into it.

        Raises:
            ForkError if the existence check or the fork request fails.
        """

        try:
            exists = self._github.repository_exists(fork.full_name)
        except requests.RequestException as e:
            raise ForkError(source, str(e)) from e

        if exists:
            print(f"Repository already exists: {fork}")
            print("Using existing repository")
            logger.info("Fork already exists", extra={"fork": fork.full_name})
            return ForkOutcome(fork=fork, created=False)

        print("Forking repository...")
        try:
            created_name = self._github.create_fork(source.full_name)
        except (GithubException, requests.RequestException) as e:
            print("Failed to fork repository")
            print("This could be due to:")
            for cause in FORK_FAILURE_CAUSES:
                print(f"  - {cause}")
            raise ForkError(source, str(e)) from e

        if created_name.lower() != fork.full_name.lower():
            logger.warning(
                "Fork name differs from the expected name",
                extra={"expected": fork.full_name, "actual": created_name},
            )
        print(f"Fork created as {fork}")

        # Forks are created asynchronously; give GitHub a moment before patching it.
        if self._fork_wait_seconds > 0:
            self._sleep(self._fork_wait_seconds)
        return ForkOutcome(fork=fork, created=True)

    def enable_issues(self, fork: RepositoryRef) -> bool:
        """Turn on issue tracking for the fork. Failure is reported, not raised."""

        try:
            self._github.enable_issues(fork.full_name)
        except requests.RequestException as e:
            logger.warning(
                "Could not enable issues", extra={"fork": fork.full_name, "error": str(e)}
            )
            print("Warning: Could not enable issues")
            return False

        print("Issues enabled successfully")
        return True
