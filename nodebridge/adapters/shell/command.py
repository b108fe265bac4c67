"""
Shell process runner — the one place nodebridge spawns processes.

Commands go through the shell so callers can pass pre-quoted strings
(``npm install ... name@"^1.0"``, ``node '/path/script.js' --flag``).
stderr is folded into stdout, the same as ``2>&1``.
"""

from __future__ import annotations

import logging
import subprocess
import time

from nodebridge.adapters.base import ProcessResult, ProcessRunner

logger = logging.getLogger(__name__)


class ShellProcessRunner(ProcessRunner):
    """Run shell commands and capture combined output.

    Args:
        timeout: Seconds before giving up, or None to wait forever.
        cwd: Working directory for every command (default: inherited).
    """

    def __init__(self, timeout: float | None = None, cwd: str | None = None):
        self._timeout = timeout
        self._cwd = cwd

    @property
    def name(self) -> str:
        return "shell"

    def run(self, command: str) -> ProcessResult:
        logger.debug("Executing: %s", command)
        start = time.monotonic()

        try:
            result = subprocess.run(
                command,
                shell=True,
                cwd=self._cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as e:
            elapsed_ms = int((time.monotonic() - start) * 1000)
            partial = e.output or ""
            if isinstance(partial, bytes):
                partial = partial.decode("utf-8", errors="replace")
            logger.warning("Command timed out after %ss: %s", self._timeout, command)
            return ProcessResult(
                output=partial + f"\nCommand timed out after {self._timeout}s",
                returncode=124,
                duration_ms=elapsed_ms,
            )
        except OSError as e:
            logger.warning("Cannot execute %s: %s", command, e)
            return ProcessResult(output=str(e), returncode=127)

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("Exit %d after %dms: %s", result.returncode, elapsed_ms, command)
        return ProcessResult(
            output=result.stdout or "",
            returncode=result.returncode,
            duration_ms=elapsed_ms,
        )
