"""Unit tests for manifest merging (magic_cli.manifest)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from magic_cli.manifest import (
    DEFAULT_AUTHOR,
    DEFAULT_DESCRIPTION,
    DEFAULT_VERSION,
    ProjectManifest,
    default_name,
    manifest_defaults,
    merge_manifest,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def defaults(tmp_path: Path) -> dict[str, str]:
    return manifest_defaults(tmp_path / "my-app")


class TestDefaults:
    def test_name_is_last_path_segment(self, tmp_path: Path):
        assert default_name(tmp_path / "nested" / "my-app") == "my-app"

    def test_documented_values(self, defaults):
        assert defaults == {
            "name": "my-app",
            "version": "1.0.0",
            "description": "ts + dvajs",
            "author": "zhyjor@163.com",
        }


class TestMergeManifest:
    def test_user_wins_template_fills_gaps(self, defaults):
        manifest = merge_manifest({"name": "a", "version": "0.0.1"}, {"name": "b"}, defaults)
        assert manifest.name == "b"
        assert manifest.version == "0.0.1"
        assert manifest.description == DEFAULT_DESCRIPTION
        assert manifest.author == DEFAULT_AUTHOR

    def test_no_input_gives_defaults(self, defaults):
        manifest = merge_manifest({}, {}, defaults)
        assert manifest.to_dict() == defaults

    def test_blank_user_values_are_ignored(self, defaults):
        manifest = merge_manifest({"version": "2.0.0"}, {"version": "  ", "author": ""}, defaults)
        assert manifest.version == "2.0.0"
        assert manifest.author == DEFAULT_AUTHOR

    def test_user_values_are_stripped(self, defaults):
        assert merge_manifest({}, {"name": "  demo "}, defaults).name == "demo"

    def test_non_string_template_author_replaced(self, defaults):
        raw = {"author": {"name": "someone", "email": "x@y.z"}}
        assert merge_manifest(raw, {}, defaults).author == DEFAULT_AUTHOR

    def test_other_template_keys_carried_through(self, defaults):
        raw = {"name": "tpl", "scripts": {"start": "umi dev"}, "dependencies": {"dva": "^2.4.1"}}
        data = merge_manifest(raw, {"name": "demo"}, defaults).to_dict()
        assert data["scripts"] == {"start": "umi dev"}
        assert data["dependencies"] == {"dva": "^2.4.1"}
        assert list(data)[:3] == ["name", "scripts", "dependencies"]
        assert data["version"] == DEFAULT_VERSION

    def test_missing_default_raises(self):
        with pytest.raises(ValueError, match="author"):
            merge_manifest({}, {}, {"name": "x", "version": "1", "description": "d"})


class TestProjectManifestJson:
    def test_two_space_indent_and_trailing_newline(self):
        manifest = ProjectManifest(name="demo", version="1.0.0", description="d", author="a")
        text = manifest.to_json()
        assert text.endswith("}\n")
        assert '\n  "name": "demo"' in text
        assert json.loads(text) == {"name": "demo", "version": "1.0.0", "description": "d", "author": "a"}

    def test_non_ascii_kept_verbatim(self):
        manifest = ProjectManifest(name="demo", version="1.0.0", description="脚手架", author="a")
        assert "脚手架" in manifest.to_json()
