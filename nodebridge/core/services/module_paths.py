"""
Module paths — where a node module lives on disk.

Defaults to ``<prefix>/node_modules/<name>``.  Applications that ship
a module elsewhere register an override, which applies process-wide
because it is stored on the shared settings value.
"""

from __future__ import annotations

from pathlib import Path

from nodebridge.core.models.settings import BridgeSettings


class ModulePaths:
    """Resolve logical module names to directories."""

    def __init__(self, settings: BridgeSettings):
        self.settings = settings

    @property
    def prefix_path(self) -> Path:
        """The ``npm --prefix`` directory."""
        return self.settings.effective_prefix

    @property
    def node_modules_dir(self) -> Path:
        return self.prefix_path / "node_modules"

    def set_module_path(self, module: str, path: str | Path) -> None:
        self.settings.set_module_path(module, path)

    def resolve(self, module: str) -> Path:
        """Registered override for ``module``, else the default location."""
        override = self.settings.module_paths.get(module)
        if override is not None and str(override) not in ("", "."):
            return Path(override)
        return self.node_modules_dir / module
