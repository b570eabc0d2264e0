"""
templates.py

Responsibility: the template registry.

Maps a caller-facing template identifier to a description (shown as a prompt
choice) and a remote repository location (host + path, no scheme, no
credentials). The built-in list can be extended or overridden from the
config file; see `config.py`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from magic_cli.errors import UnknownTemplate


@dataclass(frozen=True)
class TemplateEntry:
    type: str
    desc: str
    repo: str


TEMPLATE_LIST: tuple[TemplateEntry, ...] = (
    TemplateEntry(
        type="dva-ts",
        desc="dva + TypeScript (PC)",
        repo="git.example.com/magic-cli/template-dva-ts.git",
    ),
    TemplateEntry(
        type="dva-ts-mobile",
        desc="dva + TypeScript (H5)",
        repo="git.example.com/magic-cli/template-dva-ts-mobile.git",
    ),
    TemplateEntry(
        type="umi-ts",
        desc="umi + TypeScript",
        repo="git.example.com/magic-cli/template-umi-ts.git",
    ),
)


def merge_registry(base: Iterable[TemplateEntry], extra: Iterable[TemplateEntry]) -> tuple[TemplateEntry, ...]:
    """Entries in `extra` replace same-type entries in `base`; new types are appended."""
    merged = {entry.type: entry for entry in base}
    for entry in extra:
        merged[entry.type] = entry
    return tuple(merged.values())


def resolve_template(template_type: str, registry: Sequence[TemplateEntry] = TEMPLATE_LIST) -> TemplateEntry:
    for entry in registry:
        if entry.type == template_type:
            if not entry.repo.strip():
                raise UnknownTemplate(f"Template {template_type!r} has no remote location.")
            return entry
    known = ", ".join(entry.type for entry in registry) or "(none)"
    raise UnknownTemplate(f"Unknown template: {template_type!r} (known: {known})")
