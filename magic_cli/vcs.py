"""
vcs.py

Responsibility: the git steps of a scaffold run.

`git_init` failures are fatal (VersionControlInitError). `git_commit`
failures raise CommitError, which the orchestrator tolerates: a missing
user.name / user.email is common on a fresh machine.
"""

from __future__ import annotations

from pathlib import Path

from magic_cli.errors import CommitError, VersionControlInitError
from magic_cli.runner import CommandError, CommandRunner, run_command

DEFAULT_COMMIT_MESSAGE = "init"


def git_init(workdir: Path, *, runner: CommandRunner = run_command) -> None:
    try:
        runner(["git", "init"], cwd=workdir)
    except CommandError as e:
        raise VersionControlInitError(f"Failed initializing git repository in {workdir}\n\n{e}") from e


def git_commit(workdir: Path, message: str | None = None, *, runner: CommandRunner = run_command) -> None:
    """Stage everything and create the initial commit."""
    msg = message or DEFAULT_COMMIT_MESSAGE
    try:
        runner(["git", "add", "-A"], cwd=workdir)
        runner(["git", "commit", "-m", msg], cwd=workdir)
    except CommandError as e:
        raise CommitError(str(e)) from e
