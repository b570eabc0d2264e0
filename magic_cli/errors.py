"""
errors.py

Responsibility: error kinds raised by the scaffolding pipeline.

Every kind except `CommitError` aborts a run. The CLI prints the message of
any `ScaffoldError` verbatim and exits non-zero.
"""

from __future__ import annotations


class ScaffoldError(RuntimeError):
    pass


class UnknownTemplate(ScaffoldError):
    pass


class FetchError(ScaffoldError):
    pass


class MaterializeError(ScaffoldError):
    pass


class VersionControlInitError(ScaffoldError):
    pass


class InstallError(ScaffoldError):
    pass


class CommitError(ScaffoldError):
    """Initial commit failed. Downgraded to a warning by the orchestrator."""


class ConfigError(ScaffoldError):
    pass


class TargetExistsError(ScaffoldError):
    pass
