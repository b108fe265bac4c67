"""
Error taxonomy — the hard failures callers can branch on.

Recoverable conditions (bad manifests, failed installer attempts,
prompt failures) are logged and never raised.  Everything here is a
hard failure that propagates to the caller.
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base class for every error raised by nodebridge."""


class ConfigError(BridgeError):
    """Raised when nodebridge.yml is invalid or unreadable."""


class NodeMissingError(BridgeError, RuntimeError):
    """Node is not installed and no fallback was provided."""

    def __init__(self, message: str = "Please install node.js or provide a Python fallback."):
        super().__init__(message)


class InvalidFallbackError(BridgeError, TypeError):
    """A fallback was provided but cannot be called."""

    def __init__(self, message: str = "The fallback provided is not callable."):
        super().__init__(message)


class ScriptNotFoundError(BridgeError, FileNotFoundError):
    """A module script does not exist on disk."""

    def __init__(self, script: str, module_path: str):
        self.script = script
        self.module_path = module_path
        super().__init__(f"The {script} was not found in the module path {module_path}.")
