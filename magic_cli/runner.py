"""
runner.py

Responsibility: the single place that spawns subprocesses.

Pipeline steps depend only on exit success / failure: `run_command` returns
on success and raises `CommandError` otherwise. Steps translate that into
their own error kind (`FetchError`, `InstallError`, ...).
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Sequence

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    def __init__(self, cmd: Sequence[str], output: str = "") -> None:
        self.cmd = list(cmd)
        self.output = output
        super().__init__(f"Command failed: {' '.join(self.cmd)}\n\n{output}".rstrip())


# (cmd, cwd) -> None, raising CommandError on failure
CommandRunner = Callable[..., None]


def run_command(cmd: Sequence[str], *, cwd: Path, env: dict[str, str] | None = None) -> None:
    """
    Run a subprocess command in `cwd`, raising a CommandError on failure.

    Blocks until the child exits. No timeout is applied.
    """
    logger.debug("running %s in %s", cmd[0], cwd)
    try:
        subprocess.run(
            list(cmd),
            cwd=str(cwd),
            env=env,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except subprocess.CalledProcessError as e:
        raise CommandError(cmd, e.stdout or "") from e
    except OSError as e:
        # Executable missing or cwd unusable.
        raise CommandError(cmd, str(e)) from e
