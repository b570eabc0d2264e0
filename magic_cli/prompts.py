"""
prompts.py

Responsibility: collect answers from the user.

The orchestrator only depends on the `Prompter` protocol: blocking calls that
return plain values. `RichPrompter` asks on the terminal; `DefaultsPrompter`
answers everything with its default (`--yes`, scripted runs, tests).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from rich.console import Console
from rich.prompt import IntPrompt, Prompt


@dataclass(frozen=True)
class Choice:
    label: str
    value: str


@dataclass(frozen=True)
class PromptField:
    name: str
    message: str
    default: str = ""


class Prompter(Protocol):
    def prompt_choice(self, label: str, choices: Sequence[Choice]) -> str: ...

    def prompt_text(self, fields: Sequence[PromptField]) -> dict[str, str]: ...


class RichPrompter:
    def __init__(self, console: Console | None = None) -> None:
        self._console = console

    def prompt_choice(self, label: str, choices: Sequence[Choice]) -> str:
        if not choices:
            raise ValueError("prompt_choice needs at least one choice")
        out = self._console or Console()
        out.print(f"[bold]{label}[/bold]")
        for index, choice in enumerate(choices, start=1):
            out.print(f"  [cyan]{index}[/cyan]) {choice.label}", highlight=False)
        try:
            picked = IntPrompt.ask(
                "Choice",
                console=self._console,
                choices=[str(i) for i in range(1, len(choices) + 1)],
                default=1,
            )
        except EOFError:
            # stdin closed (piped or CI run): take the default choice
            picked = 1
        return choices[picked - 1].value

    def prompt_text(self, fields: Sequence[PromptField]) -> dict[str, str]:
        answers = {f.name: f.default for f in fields}
        for f in fields:
            try:
                answers[f.name] = Prompt.ask(f.message, console=self._console, default=f.default)
            except EOFError:
                # stdin closed: this field and the rest keep their defaults
                break
        return answers


class DefaultsPrompter:
    def __init__(self, choice: str | None = None) -> None:
        self._choice = choice

    def prompt_choice(self, label: str, choices: Sequence[Choice]) -> str:
        if self._choice is not None:
            return self._choice
        if not choices:
            raise ValueError("prompt_choice needs at least one choice")
        return choices[0].value

    def prompt_text(self, fields: Sequence[PromptField]) -> dict[str, str]:
        return {f.name: f.default for f in fields}
