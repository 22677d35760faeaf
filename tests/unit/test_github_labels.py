"""Unit tests for label metadata helpers."""

from __future__ import annotations

import pytest

from repo_bootstrap.github_labels import (
    DEFAULT_LABEL_COLOR,
    fallback_label_spec,
    label_spec_from_json,
    normalize_label_color,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("d73a4a", "d73a4a"),
        ("#D73A4A", "d73a4a"),
        ("", DEFAULT_LABEL_COLOR),
        ("red", DEFAULT_LABEL_COLOR),
        (None, DEFAULT_LABEL_COLOR),
    ],
)
def test_normalize_label_color(value: object, expected: str) -> None:
    assert normalize_label_color(value) == expected


def test_label_spec_from_json() -> None:
    spec = label_spec_from_json(
        {"name": "good first issue", "color": "7057ff", "description": None}
    )

    assert spec.name == "good first issue"
    assert spec.color == "7057ff"
    assert spec.description == ""


def test_label_spec_from_json_requires_name() -> None:
    with pytest.raises(ValueError):
        label_spec_from_json({"color": "7057ff"})


def test_fallback_label_spec_uses_default_color() -> None:
    spec = fallback_label_spec(" bug ")

    assert spec.name == "bug"
    assert spec.color == DEFAULT_LABEL_COLOR
    assert spec.description == ""
