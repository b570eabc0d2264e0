"""Shared fixtures for magic-cli tests.

No test touches the network, a real git binary or a package manager: the
subprocess layer is replaced by `FakeRunner`, which records commands and
can be told to fail on a given command prefix.
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Sequence

import pytest
from rich.console import Console

from magic_cli.runner import CommandError


class FakeRunner:
    def __init__(self, fail_on: Sequence[Sequence[str]] = (), on_clone=None):
        self.calls: list[tuple[list[str], Path]] = []
        self._fail_on = [list(prefix) for prefix in fail_on]
        self._on_clone = on_clone

    def __call__(self, cmd, *, cwd, env=None):
        cmd = list(cmd)
        self.calls.append((cmd, Path(cwd)))
        for prefix in self._fail_on:
            if cmd[: len(prefix)] == prefix:
                raise CommandError(cmd, "simulated failure")
        if cmd[:2] == ["git", "clone"] and self._on_clone is not None:
            self._on_clone(Path(cmd[-1]))

    def commands(self) -> list[list[str]]:
        return [cmd for cmd, _cwd in self.calls]


def write_template(staging: Path, manifest: dict | None = None) -> None:
    """Populate `staging` the way a `git clone` of a template would."""
    (staging / ".git").mkdir(parents=True, exist_ok=True)
    (staging / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    (staging / "src").mkdir(exist_ok=True)
    (staging / "src" / "index.ts").write_text("export default {};\n", encoding="utf-8")
    (staging / "README.md").write_text("# template\n", encoding="utf-8")
    (staging / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\xff")
    if manifest is not None:
        (staging / "package.json").write_text(json.dumps(manifest), encoding="utf-8")


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def quiet_console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    return tmp_path / "staging" / "magic-cli"


@pytest.fixture
def make_runner():
    return FakeRunner


@pytest.fixture
def template_writer():
    return write_template
