"""
Host contract — what a package manager hands to the install hook.

nodebridge does not depend on any particular package manager.  The
host adapts its event object to ``HookEvent`` and its console to
``HookIO``; ``nodebridge.adapters.io`` ships a click console and a
buffered implementation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HookIO(Protocol):
    """Output and prompting primitives of the host."""

    def write(self, message: str) -> None: ...

    def write_error(self, message: str) -> None: ...

    def is_interactive(self) -> bool: ...

    def ask(self, question: str, default: str | None = None) -> str: ...

    def ask_confirmation(self, question: str, default: bool = True) -> bool: ...


@runtime_checkable
class HookEvent(Protocol):
    """One install/update event.

    Attributes:
        vendor_dir: Directory the host installs dependencies into.
        extra: The root package's ``extra`` settings block.
        io: The host's IO capability.
    """

    vendor_dir: Path
    extra: dict[str, Any]
    io: HookIO


@dataclass
class InstallEvent:
    """Plain ``HookEvent`` for hosts without an event object of their own."""

    vendor_dir: Path
    io: HookIO
    extra: dict[str, Any] = field(default_factory=dict)
