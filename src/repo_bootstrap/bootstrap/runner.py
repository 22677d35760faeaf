"""Per-repository driver: fork, enable issues, copy open issues."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from repo_bootstrap.bootstrap.github.fork_service import ForkError, ForkService
from repo_bootstrap.bootstrap.github.issue_service import IssueReplicationService
from repo_bootstrap.bootstrap.repositories import InvalidRepositoryError, RepositoryRef

logger = logging.getLogger(__name__)

RULE_WIDTH = 60


@dataclass(frozen=True, slots=True)
class RepositoryResult:
    repository: str
    success: bool
    skipped: bool = False
    fork: str | None = None
    forked: bool = False
    copied: int = 0
    failed: int = 0
    message: str = ""


@dataclass(frozen=True, slots=True)
class RunSummary:
    results: list[RepositoryResult]

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def forks(self) -> list[str]:
        return [r.fork for r in self.results if r.success and r.fork]

    @property
    def new_forks(self) -> int:
        return sum(1 for r in self.results if r.success and r.forked)


class BootstrapRunner:
    """Processes each repository to completion before moving on to the next."""

    def __init__(
        self,
        *,
        current_user: str,
        forks: ForkService,
        issues: IssueReplicationService,
        web_url: str = "https://github.com",
    ) -> None:
        self._current_user = current_user
        self._forks = forks
        self._issues = issues
        self._web_url = web_url.rstrip("/")

    def process_repository(self, repository: str, *, index: int, total: int) -> RepositoryResult:
        print()
        print(f"Processing repository {index}/{total}: {repository}")
        print("=" * RULE_WIDTH)

        try:
            source = RepositoryRef.parse(repository)
        except InvalidRepositoryError as e:
            print(f"Error: {e}")
            return RepositoryResult(repository=repository, success=False, message=str(e))

        if source.is_owned_by(self._current_user):
            print(f"Skipping {source} (cannot fork your own repository)")
            logger.info("Skipping own repository", extra={"repo": source.full_name})
            return RepositoryResult(
                repository=repository,
                success=True,
                skipped=True,
                message="owned by current user",
            )

        fork = source.fork_for(self._current_user)

        print()
        print("Setting up fork...")
        try:
            outcome = self._forks.ensure_fork(source, fork)
        except ForkError as e:
            logger.error(
                "Fork failed", extra={"repo": source.full_name, "reason": e.reason}
            )
            return RepositoryResult(repository=repository, success=False, message=str(e))

        print()
        print("Enabling issues...")
        self._forks.enable_issues(fork)

        print()
        print("Copying open issues...")
        copy = self._issues.replicate(source, fork)

        print()
        print(f"Repository {source} completed!")
        print(f"Your fork: {self._web_url}/{fork}")
        return RepositoryResult(
            repository=repository,
            success=True,
            fork=outcome.fork.full_name,
            forked=outcome.created,
            copied=copy.copied,
            failed=copy.failed,
        )

    def run(self, repositories: Sequence[str]) -> RunSummary:
        total = len(repositories)
        results: list[RepositoryResult] = []
        for index, repository in enumerate(repositories, start=1):
            result = self.process_repository(repository, index=index, total=total)
            if not result.success:
                print(f"Failed to process {repository}")
            results.append(result)
        return RunSummary(results=results)
