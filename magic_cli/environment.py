"""
environment.py

Responsibility: decide which package manager and git steps apply.

Detection (`probe_environment`) is the only part that touches the machine.
The decisions themselves are pure functions of the resulting
`CapabilityProbe`, so they can be exercised without real subprocesses.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

PNPM_MIN_MAJOR = 3


class PackageManager(str, Enum):
    PNPM = "pnpm"
    NPM = "npm"
    YARN = "yarn"
    NONE = "none"


@dataclass(frozen=True)
class CapabilityProbe:
    pnpm_version: str | None = None
    npm_installed: bool = False
    yarn_installed: bool = False
    git_installed: bool = False
    already_in_repo: bool = False


def _major(version: str | None) -> int | None:
    if not version:
        return None
    head = version.strip().lstrip("v").split(".", 1)[0]
    return int(head) if head.isdigit() else None


def choose_package_manager(probe: CapabilityProbe) -> PackageManager:
    """
    Fixed preference: pnpm (>= 3) first, then npm, otherwise none.
    """
    major = _major(probe.pnpm_version)
    if major is not None and major >= PNPM_MIN_MAJOR:
        return PackageManager.PNPM
    if probe.npm_installed:
        return PackageManager.NPM
    return PackageManager.NONE


def should_init_git(probe: CapabilityProbe, *, force_git: bool = False, skip_git: bool = False) -> bool:
    if not probe.git_installed:
        return False
    # --git
    if force_git:
        return True
    # --no-git
    if skip_git:
        return False
    # default: true unless already in a git repo
    return not probe.already_in_repo


def is_inside_git_tree(path: str | Path) -> bool:
    """
    Walk `path` and its ancestors looking for git metadata. `path` need not exist.
    """
    current = Path(path).expanduser().resolve()
    for directory in (current, *current.parents):
        if (directory / ".git").exists():
            return True
    return False


def _tool_version(executable: str) -> str | None:
    if shutil.which(executable) is None:
        return None
    try:
        proc = subprocess.run(
            [executable, "--version"],
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        logger.debug("%s is on PATH but `--version` failed", executable)
        return None
    return proc.stdout.strip() or None


def probe_environment(target: str | Path) -> CapabilityProbe:
    probe = CapabilityProbe(
        pnpm_version=_tool_version("pnpm"),
        npm_installed=shutil.which("npm") is not None,
        yarn_installed=shutil.which("yarn") is not None,
        git_installed=shutil.which("git") is not None,
        already_in_repo=is_inside_git_tree(target),
    )
    logger.debug("environment probe: %s", probe)
    return probe
