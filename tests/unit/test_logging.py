"""Unit tests for structured logging."""

from __future__ import annotations

import io
import json
import logging

from repo_bootstrap.bootstrap.logging import configure_logging
from repo_bootstrap.bootstrap.repositories import RepositoryRef


def test_json_log_line_carries_extra_fields() -> None:
    stream = io.StringIO()
    configure_logging("info", stream=stream)

    logging.getLogger("repo_bootstrap.test").info("Label created", extra={"label": "bug"})

    line = stream.getvalue().strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["level"] == "INFO"
    assert payload["logger"] == "repo_bootstrap.test"
    assert payload["message"] == "Label created"
    assert payload["extra"] == {"label": "bug"}


def test_repository_ids_are_top_level_fields() -> None:
    stream = io.StringIO()
    configure_logging("info", stream=stream)

    logging.getLogger("repo_bootstrap.test").warning(
        "Fork name differs",
        extra={
            "source": RepositoryRef("codepath", "scalar"),
            "fork": "octocat/scalar",
            "actual": "octocat/scalar-1",
        },
    )

    payload = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert payload["source"] == "codepath/scalar"
    assert payload["fork"] == "octocat/scalar"
    assert "repo" not in payload
    assert payload["extra"] == {"actual": "octocat/scalar-1"}


def test_record_without_extra_has_no_extra_key() -> None:
    stream = io.StringIO()
    configure_logging("info", stream=stream)

    logging.getLogger("repo_bootstrap.test").info("Authenticated")

    payload = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert set(payload) == {"timestamp", "level", "logger", "message"}


def test_reconfiguring_does_not_duplicate_handlers() -> None:
    configure_logging("warning", stream=io.StringIO())
    configure_logging("warning", stream=io.StringIO())

    assert len(logging.getLogger().handlers) == 1
    assert logging.getLogger().level == logging.WARNING


def test_third_party_loggers_are_quieted() -> None:
    configure_logging("debug", stream=io.StringIO())

    assert logging.getLogger("github").level == logging.INFO
    assert logging.getLogger("urllib3").level == logging.INFO


def test_exception_is_included() -> None:
    stream = io.StringIO()
    configure_logging("error", stream=stream)

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logging.getLogger("repo_bootstrap.test").exception("Bootstrap failed")

    payload = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert "RuntimeError: boom" in payload["exception"]
