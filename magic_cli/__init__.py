"""
magic_cli package

This package implements magic-cli, a CLI that scaffolds a new project from a
remote template repository.

Key responsibilities are split across modules:
- `templates.py`: static registry of template identifiers -> remote locations
- `fetcher.py`: clone a remote template into a staging directory
- `materializer.py`: copy the staged tree into the project, extract `package.json`
- `environment.py`: detect git / package managers and decide what to run
- `orchestrator.py`: the scaffolding pipeline and its failure policy
- `cli.py`: CLI entrypoint (parse args -> config -> orchestrator)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
