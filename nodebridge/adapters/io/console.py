"""
Console IO — the HookIO used when nodebridge runs from its own CLI.
"""

from __future__ import annotations

import sys

import click


class ConsoleIO:
    """Terminal output and prompts through click."""

    def __init__(self, interactive: bool | None = None):
        self._interactive = interactive

    def write(self, message: str) -> None:
        click.echo(message)

    def write_error(self, message: str) -> None:
        click.secho(message, fg="red", err=True)

    def is_interactive(self) -> bool:
        if self._interactive is not None:
            return self._interactive
        return sys.stdin.isatty()

    def ask(self, question: str, default: str | None = None) -> str:
        # click.Abort on EOF / Ctrl-C propagates; ConfirmationMemory handles it
        return click.prompt(
            question.rstrip(),
            default=default,
            show_default=default is not None,
            prompt_suffix=" ",
        )

    def ask_confirmation(self, question: str, default: bool = True) -> bool:
        return click.confirm(question.rstrip(), default=default, show_default=False)
