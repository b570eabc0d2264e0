"""
fetcher.py

Responsibility: clone a remote template into a local staging directory.

The staging directory is owned by the fetcher until `fetch` returns; the
materializer then takes ownership and removes it. The location is supplied by
an injectable provider so that tests and concurrent runs can isolate it.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Callable

from magic_cli.credentials import GitCredentials, authenticated_url, redact
from magic_cli.errors import FetchError
from magic_cli.runner import CommandError, CommandRunner, run_command

logger = logging.getLogger(__name__)

STAGING_DIR_NAME = "magic-cli"

StagingProvider = Callable[[], Path]


def default_staging_dir() -> Path:
    return Path(tempfile.gettempdir()) / STAGING_DIR_NAME


def fixed_staging_dir(path: str | Path) -> StagingProvider:
    """
    Stage under `path`. Only the `magic-cli` subdirectory is ever emptied or
    removed; `path` itself and its other contents are left alone.
    """
    staging = Path(path).expanduser().resolve() / STAGING_DIR_NAME
    return lambda: staging


def remove_staging_dir(staging: Path) -> None:
    if staging.exists():
        shutil.rmtree(staging)


class RemoteFetcher:
    def __init__(
        self,
        staging_provider: StagingProvider = default_staging_dir,
        *,
        runner: CommandRunner = run_command,
        credentials: GitCredentials | None = None,
    ) -> None:
        self._staging_provider = staging_provider
        self._runner = runner
        self._credentials = credentials

    def fetch(self, location: str) -> Path:
        """
        Full clone of `location` into a freshly emptied staging directory.

        Raises FetchError if the directory cannot be prepared or the clone fails.
        Nothing is retried.
        """
        staging = self._staging_provider()
        try:
            # Leftover from an earlier failed run.
            remove_staging_dir(staging)
            staging.mkdir(parents=True)
        except OSError as e:
            raise FetchError(f"Cannot prepare staging directory {staging}: {e}") from e

        url = authenticated_url(location, self._credentials)
        logger.debug("cloning %s into %s", redact(url, self._credentials), staging)
        try:
            self._runner(["git", "clone", url, str(staging)], cwd=staging.parent)
        except CommandError as e:
            shutil.rmtree(staging, ignore_errors=True)
            message = redact(str(e), self._credentials)
            raise FetchError(f"Failed fetching remote template {location}\n\n{message}") from None
        return staging
