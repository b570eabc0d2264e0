"""
cli.py

Responsibility: CLI entrypoint for magic-cli.

Commands:
- `create <app-name>`: scaffold a new project from a remote template
  (config -> credentials -> orchestrator -> exit code)
- `list`: show the template registry

Pipeline behavior lives in `orchestrator.py`; this module only turns
arguments and the config file into an orchestrator and maps its outcome to a
process exit code.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.table import Table

from magic_cli import __version__
from magic_cli.config import Config, load_config
from magic_cli.console import console, error, setup_logging
from magic_cli.credentials import credentials_from_env
from magic_cli.errors import ScaffoldError, TargetExistsError
from magic_cli.fetcher import RemoteFetcher, default_staging_dir, fixed_staging_dir
from magic_cli.orchestrator import ScaffoldOptions, ScaffoldOrchestrator
from magic_cli.prompts import DefaultsPrompter, RichPrompter
from magic_cli.templates import TEMPLATE_LIST, TemplateEntry, merge_registry

logger = logging.getLogger(__name__)


def _ensure_usable_target(target: Path, *, force: bool) -> None:
    if target.exists() and not target.is_dir():
        raise TargetExistsError(f"Target exists and is not a directory: {target}")
    if not force and target.is_dir() and any(target.iterdir()):
        raise TargetExistsError(f"Target directory is not empty: {target} (use --force to allow)")


def _registry(config: Config) -> tuple[TemplateEntry, ...]:
    return merge_registry(TEMPLATE_LIST, config.templates)


def _options(args: argparse.Namespace, config: Config) -> ScaffoldOptions:
    # `--git` alone is True; `--git MESSAGE` also sets the commit message.
    commit_message = args.git if isinstance(args.git, str) else None
    return ScaffoldOptions(
        force_git=args.git is not None,
        skip_git=bool(args.no_git),
        commit_message=commit_message or config.commit_message,
        skip_get_started=bool(args.skip_get_started),
        registry=args.registry or config.registry,
    )


def create_cmd(args: argparse.Namespace) -> int:
    config = load_config(args.config)

    cwd = Path.cwd()
    in_current = args.app_name == "."
    target = (cwd if in_current else cwd / args.app_name).resolve()
    project_name = target.name if in_current else args.app_name
    _ensure_usable_target(target, force=bool(args.force) or in_current)

    staging_dir = args.staging_dir or config.staging_dir
    fetcher = RemoteFetcher(
        fixed_staging_dir(staging_dir) if staging_dir else default_staging_dir,
        credentials=credentials_from_env(
            user_env=config.credentials.user_env,
            token_env=config.credentials.token_env,
        ),
    )
    prompter = DefaultsPrompter(args.template) if args.yes else RichPrompter(console)

    orchestrator = ScaffoldOrchestrator(
        project_name,
        target,
        prompter=prompter,
        options=_options(args, config),
        template=args.template,
        registry=_registry(config),
        fetcher=fetcher,
        out=console,
        cwd=cwd,
    )
    outcome = orchestrator.run()
    if outcome.error is not None:
        raise outcome.error
    return 0


def list_cmd(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    table = Table(title="Templates")
    table.add_column("Template", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Repository", style="dim")
    for entry in _registry(config):
        table.add_row(entry.type, entry.desc, entry.repo)
    console.print(table)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="magic-cli", description="magic-cli - scaffold a project from a remote template")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--config", default=None, help="Config file (default: ~/.magic-cli.yml when present)")
    p.add_argument("-v", "--verbose", action="store_true", help="Print debug logs")
    sub = p.add_subparsers(dest="command", required=True)

    c = sub.add_parser("create", help="Create a new project from a remote template")
    c.add_argument("app_name", help="Project directory to create ('.' for the current directory)")
    c.add_argument("-t", "--template", default=None, help="Template identifier (skips the template prompt)")
    c.add_argument(
        "-g",
        "--git",
        nargs="?",
        const=True,
        default=None,
        metavar="MESSAGE",
        help=(
            "Force git initialization, optionally with an initial commit message. "
            "Put it after APP_NAME, or give MESSAGE explicitly, e.g. `create my-app -g` or `create -g \"msg\" my-app`"
        ),
    )
    c.add_argument("-n", "--no-git", action="store_true", help="Skip git initialization")
    c.add_argument("-r", "--registry", default=None, help="Package registry URL used when installing dependencies")
    c.add_argument("--skip-get-started", action="store_true", help="Do not print the get-started instructions")
    c.add_argument("-f", "--force", action="store_true", help="Allow a non-empty target directory")
    c.add_argument("-y", "--yes", action="store_true", help="Accept every default without prompting")
    c.add_argument(
        "--staging-dir",
        default=None,
        help="Parent directory for the staging area (a magic-cli subdirectory is created inside it)",
    )
    c.set_defaults(func=create_cmd)

    ls = sub.add_parser("list", help="List available templates")
    ls.set_defaults(func=list_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(bool(args.verbose))
    try:
        return int(args.func(args))
    except ScaffoldError as e:
        logger.debug("aborted", exc_info=True)
        error(str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
