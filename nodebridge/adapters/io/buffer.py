"""
Buffered IO — records output and answers prompts from a script.

Used by tests and by hosts that want to inspect what the hook said
before printing it themselves.
"""

from __future__ import annotations


class BufferIO:
    """HookIO that keeps every line and replays scripted answers.

    Args:
        interactive: Value returned by ``is_interactive``.
        answers: Replies for ``ask``, consumed in order.
        confirmations: Replies for ``ask_confirmation``, consumed in order;
            the prompt's default is used once they run out.
        ask_error: Exception raised by ``ask`` (simulates a broken terminal).
    """

    def __init__(
        self,
        interactive: bool = False,
        answers: list[str] | None = None,
        confirmations: list[bool] | None = None,
        ask_error: Exception | None = None,
    ):
        self.interactive = interactive
        self.answers = list(answers or [])
        self.confirmations = list(confirmations or [])
        self.ask_error = ask_error
        self.output: list[str] = []
        self.errors: list[str] = []
        self.questions: list[str] = []

    def write(self, message: str) -> None:
        self.output.append(message)

    def write_error(self, message: str) -> None:
        self.errors.append(message)

    def is_interactive(self) -> bool:
        return self.interactive

    def ask(self, question: str, default: str | None = None) -> str:
        self.questions.append(question)
        if self.ask_error is not None:
            raise self.ask_error
        if self.answers:
            return self.answers.pop(0)
        return default or ""

    def ask_confirmation(self, question: str, default: bool = True) -> bool:
        self.questions.append(question)
        if self.confirmations:
            return self.confirmations.pop(0)
        return default
