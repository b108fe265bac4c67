"""
Fake process runner — scripted test double for installer and facade.

Results are matched by the longest command prefix, consumed in order, and the
last scripted result for a prefix repeats once the queue runs dry.
Optional side effects (e.g. creating node_modules/<pkg>) run when a
result is handed out, so tests can simulate a successful install.
"""

from __future__ import annotations

from collections.abc import Callable

from nodebridge.adapters.base import ProcessResult, ProcessRunner


class FakeProcessRunner(ProcessRunner):
    """Universal fake runner for testing.

    By default, every command succeeds with ``default_output``.
    """

    def __init__(self, default_output: str = ""):
        self._default = ProcessResult(output=default_output)
        self._scripts: list[tuple[str, list[tuple[ProcessResult, Callable[[], None] | None]]]] = []
        self._calls: list[str] = []

    @property
    def name(self) -> str:
        return "fake"

    @property
    def calls(self) -> list[str]:
        """Every command this runner has received, in order."""
        return self._calls

    @property
    def call_count(self) -> int:
        return len(self._calls)

    def calls_starting_with(self, prefix: str) -> list[str]:
        return [c for c in self._calls if c.startswith(prefix)]

    def script(
        self,
        prefix: str,
        output: str = "",
        returncode: int = 0,
        side_effect: Callable[[], None] | None = None,
    ) -> FakeProcessRunner:
        """Queue a result for the next command starting with ``prefix``."""
        for known, queue in self._scripts:
            if known == prefix:
                queue.append((ProcessResult(output=output, returncode=returncode), side_effect))
                return self
        self._scripts.append(
            (prefix, [(ProcessResult(output=output, returncode=returncode), side_effect)])
        )
        return self

    def run(self, command: str) -> ProcessResult:
        self._calls.append(command)

        # Longest matching prefix wins ("node --version" beats "node")
        matches = [(p, q) for p, q in self._scripts if command.startswith(p)]
        if not matches:
            return self._default

        _prefix, queue = max(matches, key=lambda m: len(m[0]))
        result, side_effect = queue[0] if len(queue) == 1 else queue.pop(0)
        if side_effect is not None:
            side_effect()
        return result

    def reset(self) -> None:
        """Clear call log and scripted results."""
        self._calls.clear()
        self._scripts.clear()
