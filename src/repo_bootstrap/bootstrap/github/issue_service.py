"""Open issue replication from a source repository into its fork.

For each repository:
- fetch the open issues of the source (pull requests excluded, ascending number)
- keep them in a temporary JSON snapshot for the duration of the copy
- create the labels each issue uses, then the issue itself, in the fork
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType
from typing import Any

import requests
from github import GithubException
from pydantic import BaseModel, Field, ValidationError, field_validator

from repo_bootstrap.bootstrap.github.client import GitHubClient, parse_issue_number
from repo_bootstrap.bootstrap.repositories import RepositoryRef
from repo_bootstrap.github_labels import LabelSpec, fallback_label_spec

logger = logging.getLogger(__name__)

SNAPSHOT_PREFIX = "repo-bootstrap-issues-"


class IssueRecord(BaseModel):
    """An open source-side issue, as much of it as gets copied."""

    number: int = Field(gt=0)
    title: str = Field(min_length=1)
    body: str = Field(default="")
    labels: list[str] = Field(default_factory=list)
    url: str = Field(default="")

    @field_validator("body", mode="before")
    @classmethod
    def _none_body_is_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("labels")
    @classmethod
    def _unique_labels(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        names: list[str] = []
        for name in value:
            name = name.strip()
            if name and name not in seen:
                seen.add(name)
                names.append(name)
        return names

    @property
    def label_list(self) -> str:
        """Comma-joined label names, as passed to issue creation."""

        return ",".join(self.labels)

    @classmethod
    def from_api_json(cls, data: dict[str, Any]) -> IssueRecord:
        raw_labels = data.get("labels")
        labels: list[str] = []
        if isinstance(raw_labels, list):
            for label in raw_labels:
                if isinstance(label, dict):
                    name = label.get("name")
                    if isinstance(name, str):
                        labels.append(name)
                elif isinstance(label, str):
                    labels.append(label)

        return cls(
            number=data.get("number"),
            title=data.get("title") or "",
            body=data.get("body"),
            labels=labels,
            url=data.get("html_url") or "",
        )


def select_open_issues(raw: Iterable[dict[str, Any]]) -> list[IssueRecord]:
    """Keep real open issues from an issue listing, sorted by ascending number.

    GitHub returns pull requests from the issues endpoint too; they carry a
    non-null `pull_request` key.
    """

    records: list[IssueRecord] = []
    for item in raw:
        if item.get("pull_request") is not None:
            continue
        if item.get("state", "open") != "open":
            continue
        try:
            records.append(IssueRecord.from_api_json(item))
        except ValidationError:
            logger.warning(
                "Skipping malformed issue entry",
                extra={"number": item.get("number"), "title": item.get("title")},
            )
    records.sort(key=lambda r: r.number)
    return records


class IssueSnapshot:
    """Temporary JSON file holding the issues fetched for one repository.

    Used as a context manager: the file is removed on exit, including when the
    copy stops early.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @classmethod
    def create(cls, *, directory: Path | None = None) -> IssueSnapshot:
        if directory is not None:
            directory.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(prefix=SNAPSHOT_PREFIX, suffix=".json", dir=directory)
        os.close(fd)
        return cls(Path(name))

    @property
    def path(self) -> Path:
        return self._path

    def save(self, issues: list[IssueRecord]) -> None:
        payload = [issue.model_dump(mode="json") for issue in issues]
        self._path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def load(self) -> list[IssueRecord]:
        text = self._path.read_text(encoding="utf-8")
        if not text.strip():
            return []
        raw = json.loads(text)
        if not isinstance(raw, list):
            raise ValueError(f"Issue snapshot has unexpected shape: {self._path}")
        return [IssueRecord.model_validate(item) for item in raw]

    def delete(self) -> None:
        self._path.unlink(missing_ok=True)

    def __enter__(self) -> IssueSnapshot:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.delete()


@dataclass(frozen=True, slots=True)
class ReplicationResult:
    copied: int = 0
    failed: int = 0
    # (source issue number, new issue number in the fork)
    created: list[tuple[int, int]] = field(default_factory=list)


class IssueReplicationService:
    """Copies open issues and their labels from a source repository into its fork."""

    def __init__(
        self,
        *,
        github: GitHubClient,
        web_url: str = "https://github.com",
        issue_delay_seconds: float = 1.0,
        snapshot_dir: Path | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._github = github
        self._web_url = web_url.rstrip("/")
        self._issue_delay_seconds = issue_delay_seconds
        self._snapshot_dir = snapshot_dir
        self._sleep = sleep
        # (fork, lowercased label name); GitHub label names are case-insensitive.
        self._ensured_labels: set[tuple[str, str]] = set()

    def fetch_open_issues(self, source: RepositoryRef) -> list[IssueRecord]:
        raw = self._github.list_open_issues(source.full_name)
        issues = select_open_issues(raw)
        logger.info(
            "Open issues fetched",
            extra={"repo": source.full_name, "listed": len(raw), "issues": len(issues)},
        )
        return issues

    def replicate(self, source: RepositoryRef, fork: RepositoryRef) -> ReplicationResult:
        print("Fetching open issues...")
        with IssueSnapshot.create(directory=self._snapshot_dir) as snapshot:
            try:
                fetched = self.fetch_open_issues(source)
            except requests.RequestException as e:
                logger.warning(
                    "Could not fetch issues", extra={"repo": source.full_name, "error": str(e)}
                )
                print(f"Warning: Could not fetch issues from {source}")
                return ReplicationResult()

            snapshot.save(fetched)
            issues = snapshot.load()

            if not issues:
                print("No open issues found")
                return ReplicationResult()

            print(f"Found {len(issues)} open issues")
            return self.replicate_issues(source, fork, issues)

    def _source_label(self, source: RepositoryRef, name: str) -> LabelSpec:
        try:
            spec = self._github.get_label(source.full_name, name)
        except (requests.RequestException, ValueError) as e:
            logger.info(
                "Source label unavailable; using fallback color",
                extra={"repo": source.full_name, "label": name, "error": str(e)},
            )
            spec = None
        return spec or fallback_label_spec(name)

    def replicate_labels(
        self, source: RepositoryRef, fork: RepositoryRef, issue: IssueRecord
    ) -> None:
        """Make sure every label of `issue` exists in the fork."""

        for name in issue.labels:
            key = (fork.full_name.lower(), name.lower())
            if key in self._ensured_labels:
                continue

            spec = self._source_label(source, name)
            try:
                created = self._github.create_label(fork.full_name, spec)
            except requests.RequestException as e:
                logger.warning(
                    "Could not create label",
                    extra={"fork": fork.full_name, "label": name, "error": str(e)},
                )
                print(f"  Warning: Could not create label '{name}'")
                continue

            self._ensured_labels.add(key)
            if created:
                logger.info(
                    "Label created",
                    extra={"fork": fork.full_name, "label": spec.name, "color": spec.color},
                )

    def replicate_issues(
        self, source: RepositoryRef, fork: RepositoryRef, issues: list[IssueRecord]
    ) -> ReplicationResult:
        copied = 0
        failed = 0
        created: list[tuple[int, int]] = []

        for index, issue in enumerate(issues):
            if index > 0 and self._issue_delay_seconds > 0:
                self._sleep(self._issue_delay_seconds)

            self.replicate_labels(source, fork, issue)

            try:
                url = self._github.create_issue(
                    fork.full_name,
                    title=issue.title,
                    body=issue.body,
                    labels=issue.label_list,
                )
            except (GithubException, requests.RequestException, ValueError) as e:
                logger.warning(
                    "Issue creation failed",
                    extra={"fork": fork.full_name, "source_number": issue.number, "error": str(e)},
                )
                url = ""

            new_number = parse_issue_number(url, web_url=self._web_url)
            if new_number is None:
                failed += 1
                print(f"  Failed to copy #{issue.number}: {issue.title}")
                continue

            copied += 1
            created.append((issue.number, new_number))
            print(f"  Copied #{issue.number} -> #{new_number}: {issue.title}")

        print(f"Issues copied: {copied}, failed: {failed}")
        return ReplicationResult(copied=copied, failed=failed, created=created)
