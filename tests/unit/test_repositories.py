"""Unit tests for repository references."""

from __future__ import annotations

import pytest

from repo_bootstrap.bootstrap.repositories import (
    DEFAULT_REPOSITORIES,
    InvalidRepositoryError,
    RepositoryRef,
)


def test_parse_owner_and_name() -> None:
    ref = RepositoryRef.parse("codepath/puter")

    assert ref.owner == "codepath"
    assert ref.name == "puter"
    assert ref.full_name == "codepath/puter"
    assert str(ref) == "codepath/puter"


def test_parse_tolerates_surrounding_slashes_and_spaces() -> None:
    assert RepositoryRef.parse(" /codepath/omi/ ").full_name == "codepath/omi"


@pytest.mark.parametrize("value", ["", "codepath", "codepath/", "/puter", "a/b/c"])
def test_parse_rejects_invalid_format(value: str) -> None:
    with pytest.raises(InvalidRepositoryError):
        RepositoryRef.parse(value)


def test_fork_keeps_name_under_user() -> None:
    fork = RepositoryRef.parse("codepath/chatbox").fork_for("octocat")

    assert fork.full_name == "octocat/chatbox"


def test_ownership_is_case_insensitive() -> None:
    ref = RepositoryRef.parse("OctoCat/hello")

    assert ref.is_owned_by("octocat")
    assert not ref.is_owned_by("codepath")


def test_default_repositories_are_valid() -> None:
    refs = [RepositoryRef.parse(r) for r in DEFAULT_REPOSITORIES]

    assert len(refs) == 6
    assert {r.owner for r in refs} == {"codepath"}
