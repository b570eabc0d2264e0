"""
materializer.py

Responsibility: copy a staged template into the project directory.

Rules:
- Walk staged files in sorted order to ensure deterministic output.
- Copy files byte-for-byte, preserving permissions.
- Skip the template's own `.git` directory.
- Pull the template's `package.json` out of the copy set and return it parsed.
- Always remove the staging directory, whether the copy succeeded or not.

A failure partway is reported as MaterializeError; files already copied are
left in place.
"""

from __future__ import annotations

import json
import os
import shutil
from pathlib import Path
from typing import Any, Mapping

from magic_cli.errors import MaterializeError

MANIFEST_FILE = "package.json"
VCS_DIR = ".git"


def _iter_template_files(template_dir: Path) -> list[Path]:
    """
    Return all files under template_dir except version-control metadata, in
    deterministic lexicographic order (relative path ordering).

    Symlinked directories are returned as entries of their own; os.walk does
    not descend into them and they are copied as links.
    """
    files: list[Path] = []
    for root, dirs, filenames in os.walk(template_dir):
        root_path = Path(root)
        dirs[:] = [d for d in dirs if d != VCS_DIR]
        files.extend(root_path / d for d in dirs if (root_path / d).is_symlink())
        for name in filenames:
            if name == VCS_DIR:
                # `.git` file of a submodule/worktree checkout
                continue
            files.append(root_path / name)
    files.sort(key=lambda p: str(p.relative_to(template_dir)).replace(os.sep, "/"))
    return files


def _read_manifest(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise MaterializeError(f"Cannot parse template {MANIFEST_FILE}: {e}") from e
    if not isinstance(data, dict):
        raise MaterializeError(f"Template {MANIFEST_FILE} must be a JSON object.")
    return data


class ProjectMaterializer:
    def materialize(self, staging: str | Path, target: str | Path) -> dict[str, Any]:
        """
        Copy the staged template into `target` (created if absent) and return
        the template's raw manifest, or `{}` when it has none.
        """
        src_dir = Path(staging).resolve()
        dst_dir = Path(target).resolve()
        try:
            if not src_dir.is_dir():
                raise MaterializeError(f"Staged template not found: {src_dir}")

            raw_manifest: dict[str, Any] = {}
            try:
                dst_dir.mkdir(parents=True, exist_ok=True)
                for src_path in _iter_template_files(src_dir):
                    rel = src_path.relative_to(src_dir)
                    if rel == Path(MANIFEST_FILE):
                        raw_manifest = _read_manifest(src_path)
                        continue
                    dst_path = dst_dir / rel
                    dst_path.parent.mkdir(parents=True, exist_ok=True)
                    shutil.copy2(src_path, dst_path, follow_symlinks=False)
            except OSError as e:
                raise MaterializeError(f"Failed copying template into {dst_dir}: {e}") from e
            return raw_manifest
        finally:
            shutil.rmtree(src_dir, ignore_errors=True)


def write_file_tree(base: str | Path, files: Mapping[str, str]) -> None:
    """
    Write `{relative path: text}` under `base`, creating directories as needed.

    Files are written in the given order; on failure the ones already written
    stay and MaterializeError is raised.
    """
    base_dir = Path(base)
    for rel, content in files.items():
        path = base_dir / rel
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8", newline="\n")
        except OSError as e:
            raise MaterializeError(f"Failed writing {rel}: {e}") from e
