"""
npm install driver — one command, bounded retries, verified result.

All approved packages go into a single ``npm install`` call.  An
attempt only counts as a success when the output carries no error
marker AND every package directory exists afterwards: npm prints
warnings that look like errors and exits 0 on partial failures, so
neither the exit code nor the output alone is trusted.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable, Iterable, Mapping

from nodebridge.adapters.base import ProcessRunner
from nodebridge.adapters.shell.command import ShellProcessRunner
from nodebridge.core.models.settings import BridgeSettings
from nodebridge.core.services.manifest_ops import ANY_VERSION
from nodebridge.core.services.module_paths import ModulePaths

logger = logging.getLogger(__name__)


def package_spec(name: str, version: str | None) -> str:
    """Format ``name@"version"`` with the version escaped for double quotes."""
    version = version or ANY_VERSION
    escaped = version.replace("\\", "\\\\").replace('"', '\\"')
    return f'{name}@"{escaped}"'


class NpmInstaller:
    """Install npm packages into the configured prefix."""

    def __init__(
        self,
        settings: BridgeSettings,
        runner: ProcessRunner | None = None,
        paths: ModulePaths | None = None,
    ):
        self.settings = settings
        self.runner = runner or ShellProcessRunner(timeout=settings.command_timeout)
        self.paths = paths or ModulePaths(settings)

    def build_command(self, requirements: Mapping[str, str]) -> str:
        specs = " ".join(package_spec(name, version) for name, version in requirements.items())
        return (
            f"{self.settings.npm_path} install --force --loglevel=error "
            f"--prefix {shlex.quote(str(self.paths.prefix_path))} {specs}"
        )

    def install(
        self,
        requirements: Mapping[str, str],
        on_found: Callable[[str], None] | None = None,
    ) -> bool:
        """Install every package, retrying up to ``max_install_retry`` times.

        Args:
            requirements: Package name → version constraint.
            on_found: Called with each ``name@"version"`` before npm runs.

        Returns:
            True once an attempt is verified, False when the budget runs out.
        """
        if not requirements:
            return True

        if on_found is not None:
            for name, version in requirements.items():
                on_found(package_spec(name, version))

        command = self.build_command(requirements)
        names = list(requirements)
        budget = self.settings.max_install_retry

        for attempt in range(1, budget + 1):
            result = self.runner.run(command)
            marker = self._error_marker(result.output)
            if marker is None and self.is_installed_package(names):
                logger.info("Installed %d npm package(s) on attempt %d", len(names), attempt)
                return True

            if marker is not None:
                logger.warning("npm attempt %d/%d reported '%s'", attempt, budget, marker)
            else:
                missing = [n for n in names if not self.paths.resolve(n).exists()]
                logger.warning(
                    "npm attempt %d/%d left packages missing: %s",
                    attempt,
                    budget,
                    ", ".join(missing),
                )

        logger.error("npm install failed after %d attempt(s): %s", budget, command)
        return False

    def is_installed_package(self, packages: str | Iterable[str]) -> bool:
        """True iff every package's module directory exists (True for none)."""
        if isinstance(packages, str):
            packages = [packages]
        return all(self.paths.resolve(name).exists() for name in packages)

    def _error_marker(self, output: str) -> str | None:
        for marker in self.settings.error_markers:
            if marker in (output or ""):
                return marker
        return None
