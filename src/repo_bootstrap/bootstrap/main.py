"""CLI entrypoint: fork the source repositories and copy their open issues."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import NoReturn

import requests
from github import GithubException
from pydantic import ValidationError

from repo_bootstrap.bootstrap.config import BootstrapSettings
from repo_bootstrap.bootstrap.github.client import GitHubClient
from repo_bootstrap.bootstrap.github.fork_service import ForkService
from repo_bootstrap.bootstrap.github.gh_cli import INSTALL_INSTRUCTIONS, GhCli, GhCliError
from repo_bootstrap.bootstrap.github.issue_service import IssueReplicationService
from repo_bootstrap.bootstrap.logging import configure_logging
from repo_bootstrap.bootstrap.repositories import DEFAULT_REPOSITORIES
from repo_bootstrap.bootstrap.runner import BootstrapRunner, RunSummary

logger = logging.getLogger(__name__)

BANNER_WIDTH = 50
PROG = "repo-bootstrap"


class _NoArgumentParser(argparse.ArgumentParser):
    """Parser that only knows --help and exits with status 1 on anything else."""

    def error(self, message: str) -> NoReturn:
        print("Error: This command doesn't accept arguments")
        print("Use --help for usage information")
        self.exit(1)


def _repository_urls(repositories: Sequence[str], web_url: str = "https://github.com") -> str:
    return "\n".join(f"  - {web_url}/{repo}" for repo in repositories)


def build_parser(repositories: Sequence[str] = DEFAULT_REPOSITORIES) -> argparse.ArgumentParser:
    return _NoArgumentParser(
        prog=PROG,
        allow_abbrev=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=(
            "This command will automatically:\n"
            "  - Fork multiple open source repositories to your GitHub account\n"
            "  - Enable issues on each forked repository\n"
            "  - Copy the open issues (and their labels) into each fork"
        ),
        epilog=(
            "Repositories that will be forked:\n"
            f"{_repository_urls(repositories)}\n\n"
            "No arguments needed - just run the command!"
        ),
    )


def _print_banner(repositories: Sequence[str]) -> None:
    print("Repository Bootstrap")
    print("=" * BANNER_WIDTH)
    print(f"Repositories to fork: {len(repositories)}")
    for repo in repositories:
        print(f"  - {repo}")
    print()


def _print_summary(summary: RunSummary, *, current_user: str, web_url: str) -> None:
    print()
    print()
    print("All done! Summary:")
    print("=" * BANNER_WIDTH)
    print(f"Successfully processed: {summary.successful} repositories")
    if summary.failed:
        print(f"Failed: {summary.failed} repositories")

    copied = sum(r.copied for r in summary.results)
    failed_issues = sum(r.failed for r in summary.results)
    print(f"Issues copied: {copied}")
    if failed_issues:
        print(f"Issues failed: {failed_issues}")

    if summary.forks:
        reused = len(summary.forks) - summary.new_forks
        print(f"Forks created: {summary.new_forks}, already present: {reused}")
        print()
        print("Your forked repositories:")
        for fork in summary.forks:
            print(f"  - {web_url}/{fork}")

    print()
    print("Next steps:")
    print(f"  - View your repositories: {web_url}/{current_user}?tab=repositories")
    print(f"  - Clone a repository: git clone {web_url}/{current_user}/REPO_NAME")
    print("  - Start exploring and contributing to the repositories!")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    parser.parse_args(argv)

    try:
        settings = BootstrapSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment / .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 1

    configure_logging(settings.log_level)

    repositories = DEFAULT_REPOSITORIES
    _print_banner(repositories)

    gh = GhCli(executable=settings.gh_executable, hostname=settings.github_hostname)
    if not gh.is_installed():
        print("Error: GitHub CLI (gh) is not installed")
        print()
        print(INSTALL_INSTRUCTIONS)
        return 1

    print("Step 1: GitHub Authentication Required")
    try:
        token = gh.authenticate(force_login=settings.force_login)
    except GhCliError as e:
        logger.error("Authentication failed", extra={"reason": str(e)})
        print(str(e))
        return 1

    github = GitHubClient(token=token, base_url=settings.github_base_url)
    try:
        try:
            current_user = github.get_authenticated_login()
        except (GithubException, requests.RequestException, ValueError):
            logger.exception("Could not look up the authenticated user")
            print("Authentication verification failed")
            return 1

        print(f"Authenticated as: {current_user}")

        runner = BootstrapRunner(
            current_user=current_user,
            forks=ForkService(github=github, fork_wait_seconds=settings.fork_wait_seconds),
            issues=IssueReplicationService(
                github=github,
                web_url=settings.github_web_url,
                issue_delay_seconds=settings.issue_delay_seconds,
                snapshot_dir=settings.snapshot_dir,
            ),
            web_url=settings.github_web_url,
        )
        summary = runner.run(repositories)
        _print_summary(summary, current_user=current_user, web_url=settings.github_web_url)
        return 0

    except Exception:
        logger.exception("Bootstrap failed")
        return 1

    finally:
        github.close()


if __name__ == "__main__":
    raise SystemExit(main())
