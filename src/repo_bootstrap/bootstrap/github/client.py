"""GitHub API client wrapper.

Wraps PyGithub and a plain requests session so that GitHub calls stay out of the
CLI code and tests can inject mocks. Unlike a repository-scoped client, every
call takes the repository it operates on: one run touches a source repository
and its fork for each entry in the list.
"""

from __future__ import annotations

import itertools
import logging
import re
from typing import Any
from urllib.parse import quote

import requests
from github import Auth, Github

from repo_bootstrap.github_labels import LabelSpec, label_spec_from_json

logger = logging.getLogger(__name__)

_ISSUE_PATH = re.compile(r"^/[^/]+/[^/]+/issues/(\d+)/?$")


def parse_labels(value: str | None) -> list[str]:
    """Split a comma-joined label list into names, dropping blanks."""

    if value is None:
        return []
    parts = [p.strip() for p in value.split(",")]
    return [p for p in parts if p]


def parse_issue_number(url: object, *, web_url: str) -> int | None:
    """Return the issue number from an issue URL, or None if it isn't one.

    `web_url` is the GitHub web root (e.g. "https://github.com"); the URL must
    start with it and be of the form `{web_url}/{owner}/{repo}/issues/{number}`.
    """

    if not isinstance(url, str):
        return None
    prefix = web_url.rstrip("/")
    value = url.strip()
    if not value.startswith(prefix + "/"):
        return None
    match = _ISSUE_PATH.match(value[len(prefix) :])
    if match is None:
        return None
    number = int(match.group(1))
    return number if number > 0 else None


class GitHubClient:
    """Small wrapper around PyGithub/REST for the operations a bootstrap run needs."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://api.github.com",
        github_api: Github | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")

        self._rest_base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "repo-bootstrap",
            }
        )

        auth = Auth.Token(token)
        self._github = github_api or Github(auth=auth, base_url=self._rest_base_url)

    def _repo_url(self, *, repository: str, path: str = "") -> str:
        repo = repository.strip().strip("/")
        path = path.strip("/")
        if not path:
            return f"{self._rest_base_url}/repos/{repo}"
        return f"{self._rest_base_url}/repos/{repo}/{path}"

    def get_authenticated_login(self) -> str:
        login = self._github.get_user().login
        if not isinstance(login, str) or not login.strip():
            raise ValueError("Unexpected user response: missing login")
        return login

    def repository_exists(self, repository: str) -> bool:
        resp = self._session.get(self._repo_url(repository=repository), timeout=30)
        if resp.status_code == 404:
            return False
        resp.raise_for_status()
        return True

    def create_fork(self, repository: str) -> str:
        """Request a fork of `repository` under the authenticated user.

        Returns:
            Full name of the fork as reported by GitHub.

        Raises:
            github.GithubException on API failures.
        """

        fork = self._github.get_repo(repository, lazy=True).create_fork()
        logger.info("Fork requested", extra={"source": repository, "fork": fork.full_name})
        return fork.full_name

    def enable_issues(self, repository: str) -> None:
        resp = self._session.patch(
            self._repo_url(repository=repository),
            json={"has_issues": True},
            timeout=30,
        )
        resp.raise_for_status()

    def _get_paginated_json_list(
        self, url: str, *, params: dict[str, str] | None = None
    ) -> list[dict[str, Any]]:
        """Fetch a REST endpoint that returns a JSON list, following pagination.

        Stops at the first page shorter than `per_page`.
        """

        items: list[dict[str, Any]] = []
        per_page = 100
        for page in itertools.count(1):
            query: dict[str, str | int] = dict(params or {})
            query.update({"per_page": per_page, "page": page})
            resp = self._session.get(url, params=query, timeout=30)
            resp.raise_for_status()
            payload = resp.json()
            if not isinstance(payload, list):
                break

            items.extend(p for p in payload if isinstance(p, dict))

            if len(payload) < per_page:
                break
        return items

    def list_open_issues(self, repository: str) -> list[dict[str, Any]]:
        """Return the raw open issue listing (pull requests included, as GitHub sends it)."""

        url = self._repo_url(repository=repository, path="issues")
        items = self._get_paginated_json_list(
            url, params={"state": "open", "sort": "created", "direction": "asc"}
        )
        logger.debug("Issues listed", extra={"repo": repository, "count": len(items)})
        return items

    def get_label(self, repository: str, name: str) -> LabelSpec | None:
        url = self._repo_url(repository=repository, path=f"labels/{quote(name, safe='')}")
        resp = self._session.get(url, timeout=30)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return label_spec_from_json(resp.json())

    @staticmethod
    def _is_already_exists(resp: requests.Response) -> bool:
        try:
            payload = resp.json()
        except ValueError:
            return False
        if not isinstance(payload, dict):
            return False
        errors = payload.get("errors")
        if not isinstance(errors, list):
            return False
        return any(isinstance(e, dict) and e.get("code") == "already_exists" for e in errors)

    def create_label(self, repository: str, label: LabelSpec) -> bool:
        """Create a label; returns False when it already exists."""

        url = self._repo_url(repository=repository, path="labels")
        payload = {"name": label.name, "color": label.color, "description": label.description}
        resp = self._session.post(url, json=payload, timeout=30)
        if resp.status_code == 422 and self._is_already_exists(resp):
            return False
        resp.raise_for_status()
        return True

    def create_issue(self, repository: str, *, title: str, body: str, labels: str) -> str:
        """Create an issue and return its html URL.

        `labels` is a comma-joined label list ("bug,ui"); an empty string means no labels.
        """

        if not title.strip():
            raise ValueError("Issue title is required")

        repo = self._github.get_repo(repository, lazy=True)
        issue = repo.create_issue(title=title, body=body, labels=parse_labels(labels))
        url = getattr(issue, "html_url", None)
        return url if isinstance(url, str) else ""

    def close(self) -> None:
        self._session.close()
        self._github.close()
