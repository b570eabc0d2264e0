"""
manifest.py

Responsibility: the project manifest (`package.json`) and how it is merged.

For name / version / description / author the precedence is:
user-supplied value > value from the template's own manifest > default.
Blank user values count as not supplied. Every other key of the template
manifest (scripts, dependencies, ...) is carried through untouched.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

DEFAULT_VERSION = "1.0.0"
DEFAULT_DESCRIPTION = "ts + dvajs"
DEFAULT_AUTHOR = "zhyjor@163.com"

MANIFEST_FIELDS = ("name", "version", "description", "author")


def default_name(target: str | Path) -> str:
    """Last path segment of the target directory."""
    return Path(target).resolve().name


def manifest_defaults(target: str | Path) -> dict[str, str]:
    return {
        "name": default_name(target),
        "version": DEFAULT_VERSION,
        "description": DEFAULT_DESCRIPTION,
        "author": DEFAULT_AUTHOR,
    }


@dataclass(frozen=True)
class ProjectManifest:
    name: str
    version: str
    description: str
    author: str
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Template key order first, then any of the four fields it lacked."""
        data = dict(self.extra)
        for key in MANIFEST_FIELDS:
            data[key] = getattr(self, key)
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False) + "\n"


def _supplied(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def merge_manifest(
    raw: Mapping[str, Any],
    overrides: Mapping[str, Any],
    defaults: Mapping[str, str],
) -> ProjectManifest:
    """
    Non-string template values (e.g. an `author` object) are not used for the
    four fields; the user value or the default replaces them.
    """
    resolved: dict[str, str] = {}
    for key in MANIFEST_FIELDS:
        for source in (overrides, raw, defaults):
            value = source.get(key)
            if _supplied(value):
                resolved[key] = value.strip()
                break
        else:
            raise ValueError(f"No value for manifest field {key!r}")
    return ProjectManifest(extra=dict(raw), **resolved)
