"""
Process runner base — the contract between services and subprocesses.

The installer and the execution facade never call ``subprocess``
directly.  They hand a shell command to a ``ProcessRunner`` and get
back the combined output and exit status.  Tests swap in
``FakeProcessRunner`` to script per-call results.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of one command: stdout and stderr interleaved, plus exit code."""

    output: str = ""
    returncode: int = 0
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessRunner(ABC):
    """Abstract base class for command runners.

    Runners block until the command exits.  They never raise for a
    non-zero exit; the status is carried in the result.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The runner identifier (e.g., 'shell', 'fake')."""

    @abstractmethod
    def run(self, command: str) -> ProcessResult:
        """Run a shell command and capture its combined output."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
