"""
Install hook — the entry point a package manager calls on install/update.

    collect_requirements  →  negotiate  →  NpmInstaller.install

Progress and results go to the host's IO.  Installer failure is
reported as an error line, never raised: the host's own install must
not fail because an optional npm dependency could not be fetched.
"""

from __future__ import annotations

import logging

from nodebridge.adapters.base import ProcessRunner
from nodebridge.core.models.host import HookEvent
from nodebridge.core.models.settings import BridgeSettings
from nodebridge.core.observability.logging_config import attach_host_io, detach_host_io
from nodebridge.core.services.confirmation import ConfirmationMemory
from nodebridge.core.services.consent import negotiate
from nodebridge.core.services.install_ops import NpmInstaller
from nodebridge.core.services.manifest_ops import collect_confirmations, collect_requirements

logger = logging.getLogger(__name__)


def install_hook(
    event: HookEvent,
    settings: BridgeSettings | None = None,
    runner: ProcessRunner | None = None,
    memory: ConfirmationMemory | None = None,
    route_logs: bool = True,
) -> bool:
    """Collect, confirm and install the npm packages of a dependency tree.

    Args:
        event: The host's install/update event.
        settings: Shared settings (defaults when None).
        runner: Process runner for npm (shell when None).
        memory: Confirmation memory (file-backed from settings when None).
        route_logs: Forward nodebridge warnings to ``event.io``.

    Returns:
        True when there was nothing to do or the install was verified.
    """
    settings = settings or BridgeSettings()
    io = event.io
    handler = attach_host_io(io) if route_logs else None

    try:
        key = settings.manifest_key
        requirements = collect_requirements(event.vendor_dir, key, settings.manifest_name)

        if not requirements:
            io.write(
                "No packages found."
                if key in (event.extra or {})
                else f"Warning: in order to use nodebridge, you should add an '{key}' "
                "setting in the extra section of your manifest"
            )
            return True

        confirmations = collect_confirmations(
            event.vendor_dir,
            root_extra=event.extra,
            key=settings.confirm_key,
            manifest_name=settings.manifest_name,
        )
        if confirmations:
            memory = memory or ConfirmationMemory.from_settings(settings)
            requirements = negotiate(requirements, confirmations, io, memory)

        if not requirements:
            logger.info("Every package was declined, nothing to install")
            return True

        installer = NpmInstaller(settings, runner)
        ok = installer.install(
            requirements,
            lambda spec: io.write(f"Package added to be installed/updated with npm: {spec}"),
        )
        if ok:
            io.write("Packages installed.")
        else:
            io.write_error(f"Installation failed after {settings.max_install_retry} tries.")
        return ok
    finally:
        if handler is not None:
            detach_host_io(handler)


def forget_confirm_reminded_choice(settings: BridgeSettings | None = None) -> None:
    """Delete the remembered global answer so the next install asks again."""
    ConfirmationMemory.from_settings(settings or BridgeSettings()).reset()
