"""
Choice store — a single-key persisted value.

Holds the user's "don't ask again" answer between runs.  The file
store writes one plain-text token; the memory store is the substitute
used in tests and by hosts that keep their own state.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class ChoiceStore(Protocol):
    """get/set/clear over one stored token."""

    def get(self) -> str | None: ...

    def set(self, token: str) -> None: ...

    def clear(self) -> None: ...


class FileChoiceStore:
    """Token stored as the whole content of one text file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def get(self) -> str | None:
        """Return the stored token, or None if the file is absent or unreadable."""
        if not self.path.is_file():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.debug("Cannot read choice file %s: %s", self.path, e)
            return None

    def set(self, token: str) -> None:
        """Write the token, replacing any previous one.

        Raises:
            OSError: If the file cannot be written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token, encoding="utf-8")
        logger.debug("Choice '%s' saved to %s", token, self.path)

    def clear(self) -> None:
        if self.path.is_file():
            self.path.unlink()
            logger.debug("Choice file %s removed", self.path)

    def __repr__(self) -> str:
        return f"<FileChoiceStore path={str(self.path)!r}>"


class MemoryChoiceStore:
    """In-memory store; counts writes so callers can assert on them."""

    def __init__(self, token: str | None = None):
        self.token = token
        self.writes = 0

    def get(self) -> str | None:
        return self.token

    def set(self, token: str) -> None:
        self.token = token
        self.writes += 1

    def clear(self) -> None:
        self.token = None
