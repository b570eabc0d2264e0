"""
orchestrator.py

Responsibility: run one scaffold, step by step, with its failure policy.

Steps run strictly in this order; none is revisited:

1) SelectTemplate      unknown identifier        -> abort (UnknownTemplate)
2) Fetch               clone failure             -> abort (FetchError)
3) CollectMetadata     no failure path
4) Materialize         copy / parse / write      -> abort (MaterializeError)
5) VersionControlInit  `git init` failure        -> abort (VersionControlInitError)
6) InstallDependencies install failure           -> abort (InstallError)
7) InitialCommit       commit failure            -> warning only (CommitError)
8) Report

An abort skips every remaining step and leaves whatever was already written
to disk. The error is kept on the returned RunOutcome for the caller to
surface.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Sequence

from rich.console import Console

from magic_cli import __version__
from magic_cli.console import log, spinner, warn
from magic_cli.environment import (
    CapabilityProbe,
    PackageManager,
    choose_package_manager,
    probe_environment,
    should_init_git,
)
from magic_cli.errors import CommitError, ScaffoldError
from magic_cli.fetcher import RemoteFetcher
from magic_cli.installer import install_dependencies
from magic_cli.manifest import ProjectManifest, manifest_defaults, merge_manifest
from magic_cli.materializer import MANIFEST_FILE, ProjectMaterializer, write_file_tree
from magic_cli.prompts import Choice, Prompter, PromptField
from magic_cli.readme import generate_readme, next_steps
from magic_cli.runner import CommandRunner, run_command
from magic_cli.templates import TEMPLATE_LIST, TemplateEntry, resolve_template
from magic_cli.vcs import git_commit, git_init

logger = logging.getLogger(__name__)


class Step(str, Enum):
    SELECT_TEMPLATE = "select-template"
    FETCH = "fetch"
    COLLECT_METADATA = "collect-metadata"
    MATERIALIZE = "materialize"
    GIT_INIT = "git-init"
    INSTALL = "install"
    COMMIT = "commit"


@dataclass(frozen=True)
class ScaffoldOptions:
    force_git: bool = False
    skip_git: bool = False
    commit_message: str | None = None
    skip_get_started: bool = False
    registry: str | None = None


@dataclass
class RunOutcome:
    succeeded: bool = False
    git_initialized: bool = False
    git_commit_succeeded: bool = False
    error: ScaffoldError | None = None
    failed_step: Step | None = None
    manifest: ProjectManifest | None = None
    package_manager: PackageManager = PackageManager.NONE
    next_steps: list[str] = field(default_factory=list)


EventListener = Callable[[str], Any]


class ScaffoldOrchestrator:
    def __init__(
        self,
        project_name: str,
        target: str | Path,
        *,
        prompter: Prompter,
        options: ScaffoldOptions | None = None,
        template: str | None = None,
        registry: Sequence[TemplateEntry] = TEMPLATE_LIST,
        fetcher: RemoteFetcher | None = None,
        materializer: ProjectMaterializer | None = None,
        runner: CommandRunner = run_command,
        probe: CapabilityProbe | None = None,
        listener: EventListener | None = None,
        out: Console | None = None,
        cwd: str | Path | None = None,
    ) -> None:
        self.project_name = project_name
        self.target = Path(target).resolve()
        self.options = options or ScaffoldOptions()
        self._prompter = prompter
        self._template = template
        self._registry = tuple(registry)
        self._runner = runner
        self._fetcher = fetcher or RemoteFetcher(runner=runner)
        self._materializer = materializer or ProjectMaterializer()
        self._probe = probe
        self._listener = listener
        self._out = out
        self._cwd = Path(cwd).resolve() if cwd is not None else Path.cwd()

    def _emit(self, event: str) -> None:
        logger.debug("creation event: %s", event)
        if self._listener is not None:
            self._listener(event)

    def run(self) -> RunOutcome:
        outcome = RunOutcome()
        step = Step.SELECT_TEMPLATE
        staging: Path | None = None
        try:
            entry = self._select_template()

            probe = self._probe if self._probe is not None else probe_environment(self.target)
            manager = choose_package_manager(probe)
            init_git = should_init_git(
                probe,
                force_git=self.options.force_git,
                skip_git=self.options.skip_git,
            )
            outcome.package_manager = manager

            step = Step.FETCH
            staging = self._fetch(entry)

            log(f"[blue bold]magic-cli v{__version__}[/]", out=self._out)
            log(f"✨  Creating project in [yellow]{self.target}[/].", out=self._out)
            self._emit("creating")

            step = Step.COLLECT_METADATA
            answers = self._collect_metadata()

            step = Step.MATERIALIZE
            # The materializer owns the staging directory from here on.
            staged, staging = staging, None
            outcome.manifest = self._materialize(staged, answers, manager)

            if init_git:
                step = Step.GIT_INIT
                with spinner("🗃  Initializing git repository...", out=self._out):
                    self._emit("git-init")
                    git_init(self.target, runner=self._runner)
                outcome.git_initialized = True

            step = Step.INSTALL
            with spinner("⚙  Installing dependencies. This might take a while...", out=self._out):
                self._emit("deps-install")
                install_dependencies(self.target, manager, self.options.registry, runner=self._runner)

            if init_git:
                step = Step.COMMIT
                outcome.git_commit_succeeded = self._commit()
        except ScaffoldError as e:
            logger.debug("run aborted at %s", step.value, exc_info=True)
            outcome.error = e
            outcome.failed_step = step
            return outcome
        finally:
            if staging is not None:
                shutil.rmtree(staging, ignore_errors=True)

        self._report(outcome)
        outcome.succeeded = True
        self._emit("done")
        return outcome

    def _select_template(self) -> TemplateEntry:
        value = self._template
        if value is None:
            value = self._prompter.prompt_choice(
                "Please pick a template:",
                [Choice(label=entry.desc, value=entry.type) for entry in self._registry],
            )
        return resolve_template(value, self._registry)

    def _fetch(self, entry: TemplateEntry) -> Path:
        with spinner(f"Fetching remote template [yellow]{entry.type}[/]...", out=self._out):
            self._emit("fetch-remote-preset")
            return self._fetcher.fetch(entry.repo)

    def _collect_metadata(self) -> dict[str, str]:
        defaults = manifest_defaults(self.target)
        fields = [
            PromptField("name", "Project name", defaults["name"]),
            PromptField("version", "Project version", defaults["version"]),
            PromptField("description", "Project description", defaults["description"]),
            PromptField("author", "Author", defaults["author"]),
        ]
        return dict(self._prompter.prompt_text(fields))

    def _materialize(self, staging: Path, answers: dict[str, str], manager: PackageManager) -> ProjectManifest:
        raw = self._materializer.materialize(staging, self.target)
        manifest = merge_manifest(raw, answers, manifest_defaults(self.target))

        log(out=self._out)
        with spinner(f"📄  Generating [yellow]{MANIFEST_FILE}[/] and README...", out=self._out):
            write_file_tree(
                self.target,
                {
                    MANIFEST_FILE: manifest.to_json(),
                    "README.md": generate_readme(manifest, manager),
                },
            )
        return manifest

    def _commit(self) -> bool:
        try:
            git_commit(self.target, self.options.commit_message, runner=self._runner)
        except CommitError:
            logger.debug("initial commit failed", exc_info=True)
            return False
        return True

    def _report(self, outcome: RunOutcome) -> None:
        log(out=self._out)
        log(f"🎉  Successfully created project [yellow]{self.project_name}[/].", out=self._out)
        if not self.options.skip_get_started:
            outcome.next_steps = next_steps(
                self.project_name,
                outcome.package_manager,
                in_current_dir=self.target == self._cwd,
            )
            commands = "\n".join(f" [dim]$[/] [cyan]{step}[/]" for step in outcome.next_steps)
            log(f"👉  Get started with the following commands:\n\n{commands}", out=self._out)
        log(out=self._out)

        if outcome.git_initialized and not outcome.git_commit_succeeded:
            warn(
                "Skipped git commit due to missing username and email in git config.\n"
                "You will need to perform the initial commit yourself.\n",
                out=self._out,
            )
