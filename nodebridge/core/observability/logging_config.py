"""
Logging configuration — one setup call per process.

The CLI calls ``setup_logging`` once.  When nodebridge runs inside a
package manager instead, the host owns the console, so
``attach_host_io`` routes warnings through the host's IO capability.

Levels are resolved in precedence order:
    CLI flag  >  NODEBRIDGE_LOG_LEVEL env var  >  WARNING (default)

Optional file output via NODEBRIDGE_LOG_FILE / NODEBRIDGE_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nodebridge.core.models.host import HookIO

# ── Format strings ──────────────────────────────────────────────

_FMT_MINIMAL = "%(message)s"
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_SHORT = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

_ROOT_LOGGER = "nodebridge"


class HostIOHandler(logging.Handler):
    """Forward log records to a package manager's IO capability."""

    def __init__(self, io: HookIO, level: int = logging.WARNING):
        super().__init__(level)
        self.io = io
        self.setFormatter(logging.Formatter(_FMT_MINIMAL))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.WARNING:
                self.io.write_error(message)
            else:
                self.io.write(message)
        except Exception:
            self.handleError(record)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure logging for the nodebridge CLI.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file (always full detail).
        log_file_level: Separate level for the file; defaults to ``level``.
    """
    numeric_level = _parse_level(level)

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_SHORT
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_SHORT
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)
    logging.raiseExceptions = False


def attach_host_io(io: HookIO, level: str = "WARNING") -> HostIOHandler:
    """Route nodebridge log records to the host's IO.

    Returns the handler so the caller can detach it with ``detach_host_io``.
    """
    handler = HostIOHandler(io, _parse_level(level))
    logging.getLogger(_ROOT_LOGGER).addHandler(handler)
    return handler


def detach_host_io(handler: HostIOHandler) -> None:
    logging.getLogger(_ROOT_LOGGER).removeHandler(handler)


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
