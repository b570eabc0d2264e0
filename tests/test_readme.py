"""Unit tests for README and next-steps rendering (magic_cli.readme)."""

from __future__ import annotations

import pytest

from magic_cli.environment import PackageManager
from magic_cli.manifest import ProjectManifest
from magic_cli.readme import generate_readme, next_steps

pytestmark = pytest.mark.unit


@pytest.fixture
def manifest() -> ProjectManifest:
    return ProjectManifest(name="demo", version="1.0.0", description="ts + dvajs", author="zhyjor@163.com")


class TestGenerateReadme:
    def test_header_and_commands_for_pnpm(self, manifest):
        text = generate_readme(manifest, PackageManager.PNPM)
        assert text.startswith("# demo\n\nts + dvajs\n")
        assert "pnpm install" in text
        assert "pnpm run start" in text
        assert "zhyjor@163.com" in text

    def test_yarn_commands(self, manifest):
        text = generate_readme(manifest, PackageManager.YARN)
        assert "\nyarn\n" in text
        assert "yarn start" in text

    def test_no_manager_documents_npm(self, manifest):
        assert "npm start" in generate_readme(manifest, PackageManager.NONE)

    def test_template_markers_in_values_are_not_evaluated(self):
        manifest = ProjectManifest(name="demo", version="1", description="{{ 7 * 7 }}", author="a")
        assert "{{ 7 * 7 }}" in generate_readme(manifest, PackageManager.NPM)


class TestNextSteps:
    @pytest.mark.parametrize(
        ("manager", "start"),
        [
            (PackageManager.PNPM, "pnpm run start"),
            (PackageManager.YARN, "yarn start"),
            (PackageManager.NPM, "npm start"),
        ],
    )
    def test_start_command(self, manager, start):
        assert next_steps("demo", manager, in_current_dir=False) == ["cd demo", start]

    def test_current_directory_has_no_cd(self):
        assert next_steps("demo", PackageManager.NPM, in_current_dir=True) == ["npm start"]
