"""
config.py

Responsibility: load the optional user config file into a typed model.

The file is YAML (`~/.magic-cli.yml` by default, or `--config PATH`):

    registry: https://registry.npmmirror.com
    staging_dir: ~/.cache/magic-cli/staging
    commit_message: "chore: scaffold"
    credentials:
      user_env: MAGIC_CLI_GIT_USER
      token_env: MAGIC_CLI_GIT_TOKEN
    templates:
      - type: dva-ts
        desc: dva + TypeScript (PC)
        repo: git.internal.example/fe/template-dva-ts.git

`staging_dir` is a parent directory; the tool stages in its `magic-cli`
subdirectory and never removes anything else under it. Every key is
optional. Secrets never live in this file; `credentials` only
names the environment variables to read them from. CLI flags override the
values loaded here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from magic_cli.credentials import DEFAULT_TOKEN_ENV, DEFAULT_USER_ENV
from magic_cli.errors import ConfigError
from magic_cli.templates import TemplateEntry

DEFAULT_CONFIG_PATH = Path("~/.magic-cli.yml")


@dataclass(frozen=True)
class CredentialsConfig:
    user_env: str = DEFAULT_USER_ENV
    token_env: str = DEFAULT_TOKEN_ENV


@dataclass(frozen=True)
class Config:
    registry: str | None = None
    staging_dir: Path | None = None
    commit_message: str | None = None
    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)
    templates: tuple[TemplateEntry, ...] = ()


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"`{key}` must be a string when provided.")
    return value.strip() or None


def _parse_templates(raw: Any) -> tuple[TemplateEntry, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ConfigError("`templates` must be a list when provided.")
    entries: list[TemplateEntry] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ConfigError(f"`templates[{i}]` must be a mapping.")
        type_ = str(item.get("type") or "").strip()
        repo = str(item.get("repo") or "").strip()
        if not type_ or not repo:
            raise ConfigError(f"`templates[{i}]` needs both `type` and `repo`.")
        desc = str(item.get("desc") or type_).strip()
        entries.append(TemplateEntry(type=type_, desc=desc, repo=repo))
    return tuple(entries)


def _parse_credentials(raw: Any) -> CredentialsConfig:
    if raw is None:
        return CredentialsConfig()
    if not isinstance(raw, dict):
        raise ConfigError("`credentials` must be a mapping when provided.")
    unknown = set(raw) - {"user_env", "token_env"}
    if unknown:
        # Catches literal secrets pasted into the file.
        raise ConfigError(
            f"Unsupported `credentials` keys: {', '.join(sorted(unknown))} "
            "(only environment variable names are accepted)"
        )
    return CredentialsConfig(
        user_env=_optional_str(raw, "user_env") or DEFAULT_USER_ENV,
        token_env=_optional_str(raw, "token_env") or DEFAULT_TOKEN_ENV,
    )


def parse_config(data: Any) -> Config:
    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError("Config file must be a mapping/object at the top level.")

    staging = _optional_str(data, "staging_dir")
    return Config(
        registry=_optional_str(data, "registry"),
        staging_dir=Path(staging).expanduser() if staging else None,
        commit_message=_optional_str(data, "commit_message"),
        credentials=_parse_credentials(data.get("credentials")),
        templates=_parse_templates(data.get("templates")),
    )


def load_config(path: str | Path | None = None) -> Config:
    """
    Load and validate a config file.

    An explicit `path` must exist. Without one, the default location is used
    when present and an empty Config is returned otherwise.
    """
    if path is None:
        candidate = DEFAULT_CONFIG_PATH.expanduser()
        if not candidate.exists():
            return Config()
    else:
        candidate = Path(path).expanduser()
        if not candidate.exists():
            raise ConfigError(f"Config file does not exist: {candidate}")

    try:
        data = yaml.safe_load(candidate.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {candidate}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {candidate}: {e}") from e
    return parse_config(data)
