"""
installer.py

Responsibility: install the new project's dependencies.
"""

from __future__ import annotations

from pathlib import Path

from magic_cli.environment import PackageManager
from magic_cli.errors import InstallError
from magic_cli.runner import CommandError, CommandRunner, run_command


def install_command(manager: PackageManager, registry: str | None = None) -> list[str]:
    if manager is PackageManager.NONE:
        raise InstallError("No package manager found: install npm (or pnpm >= 3) and rerun.")
    if manager is PackageManager.YARN:
        cmd = ["yarn"]
    else:
        cmd = [manager.value, "install"]
    if registry:
        cmd.append(f"--registry={registry}")
    return cmd


def install_dependencies(
    workdir: Path,
    manager: PackageManager,
    registry: str | None = None,
    *,
    runner: CommandRunner = run_command,
) -> None:
    cmd = install_command(manager, registry)
    try:
        runner(cmd, cwd=workdir)
    except CommandError as e:
        raise InstallError(f"Failed installing dependencies with {manager.value}\n\n{e}") from e
