"""
Node execution facade — run through node, or fall back to Python.

Every call probes ``node --version`` once.  When node answers with a
``v``-prefixed version the script runs through the shell (``exec``) or
through node itself (``node_exec``) and the combined output comes
back.  Otherwise the caller's fallback receives the same script
string.  No fallback, or one that cannot be called, is a hard error.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from typing import Any

from nodebridge.adapters.base import ProcessRunner
from nodebridge.adapters.shell.command import ShellProcessRunner
from nodebridge.core.errors import InvalidFallbackError, NodeMissingError, ScriptNotFoundError
from nodebridge.core.models.settings import BridgeSettings
from nodebridge.core.services.module_paths import ModulePaths

logger = logging.getLogger(__name__)

VERSION_PREFIX = "v"


class NodeBridge:
    """Execute scripts with node when present, else with a fallback.

    Args:
        settings: Shared settings (module paths, prefix).
        node_path: Node binary; defaults to ``settings.node_path``.
        runner: Process runner; defaults to a shell runner.
    """

    def __init__(
        self,
        settings: BridgeSettings | None = None,
        node_path: str | None = None,
        runner: ProcessRunner | None = None,
        paths: ModulePaths | None = None,
    ):
        self.settings = settings or BridgeSettings()
        self._node_path = node_path or self.settings.node_path
        self.runner = runner or ShellProcessRunner(timeout=self.settings.command_timeout)
        self.paths = paths or ModulePaths(self.settings)

    @property
    def node_path(self) -> str:
        return self._node_path

    def set_node_path(self, node_path: str) -> NodeBridge:
        self._node_path = node_path
        return self

    # ── Probe ───────────────────────────────────────────────────

    def node_version(self) -> str | None:
        """The ``node --version`` answer, or None when node is unusable."""
        output = self.runner.run(f"{self._node_path} --version").output
        if output.startswith(VERSION_PREFIX):
            return output.strip()
        return None

    def is_node_installed(self) -> bool:
        return self.node_version() is not None

    # ── Execution ───────────────────────────────────────────────

    def exec(self, script: str, fallback: Callable[[str], Any] | None = None) -> Any:
        """Run ``script`` as a shell command if node is installed."""
        return self._exec_or_fallback(script, fallback, with_node=False)

    def node_exec(self, script: str, fallback: Callable[[str], Any] | None = None) -> Any:
        """Run ``node <script>`` if node is installed."""
        return self._exec_or_fallback(script, fallback, with_node=True)

    def exec_module_script(
        self,
        module: str,
        script: str,
        arguments: str | list[str] | None = None,
        fallback: Callable[[str], Any] | None = None,
    ) -> Any:
        """Run a script shipped inside a node module.

        Raises:
            ScriptNotFoundError: If the script does not exist.
        """
        command = self.get_module_script(module, script)
        if isinstance(arguments, (list, tuple)):
            arguments = " ".join(shlex.quote(a) for a in arguments)
        if arguments:
            command = f"{command} {arguments}"
        return self.node_exec(command, fallback)

    def get_module_script(self, module: str, script: str) -> str:
        """Shell-quoted real path of ``script`` inside ``module``."""
        module_path = self.paths.resolve(module)
        path = module_path / script
        if not path.exists():
            raise ScriptNotFoundError(script, str(module_path))
        return shlex.quote(str(path.resolve()))

    def _exec_or_fallback(
        self,
        script: str,
        fallback: Callable[[str], Any] | None,
        with_node: bool,
    ) -> Any:
        if self._check_fallback(fallback):
            command = f"{self._node_path} {script}" if with_node else script
            return self.runner.run(command).output

        logger.debug("node unavailable, using fallback for: %s", script)
        return fallback(script)

    def _check_fallback(self, fallback: Any) -> bool:
        """True when node should run; False when the fallback should."""
        if self.is_node_installed():
            return True

        if fallback is None:
            raise NodeMissingError()

        if not callable(fallback):
            raise InvalidFallbackError()

        return False
