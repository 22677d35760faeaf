"""Label metadata shared by the client and the replication service.

Labels are copied by name. Color and description come from the source
repository when it can be read; otherwise the fallback below is used so the
label can still be created in the fork.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

DEFAULT_LABEL_COLOR = "ededed"

_HEX_COLOR = re.compile(r"^[0-9a-fA-F]{6}$")


@dataclass(frozen=True, slots=True)
class LabelSpec:
    name: str
    color: str = DEFAULT_LABEL_COLOR
    description: str = ""


def normalize_label_color(value: object) -> str:
    """Return a 6-hex-digit color (no leading '#'), or the fallback color."""

    if not isinstance(value, str):
        return DEFAULT_LABEL_COLOR
    color = value.strip().lstrip("#")
    if not _HEX_COLOR.match(color):
        return DEFAULT_LABEL_COLOR
    return color.lower()


def label_spec_from_json(data: dict[str, Any]) -> LabelSpec:
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Invalid label response: missing name")

    description = data.get("description")
    if not isinstance(description, str):
        description = ""

    return LabelSpec(
        name=name,
        color=normalize_label_color(data.get("color")),
        description=description,
    )


def fallback_label_spec(name: str) -> LabelSpec:
    return LabelSpec(name=name.strip())
