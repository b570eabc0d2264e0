"""Unit tests for package-manager and git selection (magic_cli.environment).

Tests cover:
- choose_package_manager preference order and pnpm version threshold
- should_init_git truth table
- is_inside_git_tree ancestor walk
- probe_environment wiring (with PATH lookups mocked)
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from magic_cli.environment import (
    CapabilityProbe,
    PackageManager,
    choose_package_manager,
    is_inside_git_tree,
    probe_environment,
    should_init_git,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# choose_package_manager
# ---------------------------------------------------------------------------


class TestChoosePackageManager:
    def test_pnpm_at_threshold_wins(self):
        probe = CapabilityProbe(pnpm_version="3.0.0", npm_installed=True)
        assert choose_package_manager(probe) is PackageManager.PNPM

    def test_recent_pnpm_wins(self):
        probe = CapabilityProbe(pnpm_version="8.15.1\n", npm_installed=True, yarn_installed=True)
        assert choose_package_manager(probe) is PackageManager.PNPM

    def test_old_pnpm_falls_back_to_npm(self):
        probe = CapabilityProbe(pnpm_version="2.25.7", npm_installed=True)
        assert choose_package_manager(probe) is PackageManager.NPM

    def test_unparseable_pnpm_version_falls_back_to_npm(self):
        probe = CapabilityProbe(pnpm_version="unknown", npm_installed=True)
        assert choose_package_manager(probe) is PackageManager.NPM

    def test_no_pnpm_uses_npm(self):
        assert choose_package_manager(CapabilityProbe(npm_installed=True)) is PackageManager.NPM

    def test_yarn_alone_is_not_selected(self):
        assert choose_package_manager(CapabilityProbe(yarn_installed=True)) is PackageManager.NONE

    def test_nothing_installed(self):
        assert choose_package_manager(CapabilityProbe()) is PackageManager.NONE


# ---------------------------------------------------------------------------
# should_init_git
# ---------------------------------------------------------------------------


class TestShouldInitGit:
    def test_default_outside_repo(self):
        assert should_init_git(CapabilityProbe(git_installed=True)) is True

    def test_default_inside_repo(self):
        probe = CapabilityProbe(git_installed=True, already_in_repo=True)
        assert should_init_git(probe) is False

    def test_force_inside_repo(self):
        probe = CapabilityProbe(git_installed=True, already_in_repo=True)
        assert should_init_git(probe, force_git=True) is True

    def test_skip_outside_repo(self):
        assert should_init_git(CapabilityProbe(git_installed=True), skip_git=True) is False

    def test_force_beats_skip(self):
        assert should_init_git(CapabilityProbe(git_installed=True), force_git=True, skip_git=True) is True

    @pytest.mark.parametrize("force_git", [True, False])
    @pytest.mark.parametrize("already_in_repo", [True, False])
    def test_no_git_binary_is_always_false(self, force_git, already_in_repo):
        probe = CapabilityProbe(git_installed=False, already_in_repo=already_in_repo)
        assert should_init_git(probe, force_git=force_git) is False


# ---------------------------------------------------------------------------
# is_inside_git_tree
# ---------------------------------------------------------------------------


class TestIsInsideGitTree:
    def test_plain_directory(self, tmp_path: Path):
        assert is_inside_git_tree(tmp_path) is False

    def test_repo_root(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        assert is_inside_git_tree(tmp_path) is True

    def test_nested_missing_target(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        assert is_inside_git_tree(tmp_path / "packages" / "new-app") is True

    def test_git_file_counts(self, tmp_path: Path):
        # worktrees and submodules use a `.git` file
        (tmp_path / ".git").write_text("gitdir: /elsewhere\n", encoding="utf-8")
        assert is_inside_git_tree(tmp_path / "child") is True


# ---------------------------------------------------------------------------
# probe_environment
# ---------------------------------------------------------------------------


class TestProbeEnvironment:
    def test_collects_capabilities(self, tmp_path: Path):
        available = {"npm": "/usr/bin/npm", "git": "/usr/bin/git"}
        with patch("magic_cli.environment.shutil.which", side_effect=available.get):
            probe = probe_environment(tmp_path / "app")
        assert probe == CapabilityProbe(
            pnpm_version=None,
            npm_installed=True,
            yarn_installed=False,
            git_installed=True,
            already_in_repo=False,
        )

    def test_reads_pnpm_version(self, tmp_path: Path):
        with (
            patch("magic_cli.environment.shutil.which", return_value="/usr/bin/tool"),
            patch("magic_cli.environment.subprocess.run") as run,
        ):
            run.return_value.stdout = "8.6.0\n"
            probe = probe_environment(tmp_path)
        assert probe.pnpm_version == "8.6.0"
        assert choose_package_manager(probe) is PackageManager.PNPM
