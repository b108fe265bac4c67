"""
Consent negotiation — which optional npm packages may be installed.

Packages listed under ``extra.npm-confirm`` need the user's approval.
A global answer (y = install all, n = skip all, m = ask per package)
is remembered by ``ConfirmationMemory``; per-package answers are not.
Non-interactive runs skip the whole negotiation and install everything.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from nodebridge.core.models.host import HookIO
from nodebridge.core.services.confirmation import ConfirmationMemory, GlobalChoice

logger = logging.getLogger(__name__)


def global_question(count: int) -> str:
    package_word = "packages" if count > 1 else "package"
    return (
        f"{count} node {package_word} can be optionally installed/updated.\n"
        "  - Enter Y to install/update them automatically on every install/update.\n"
        "  - Enter N to ignore them and not be asked again.\n"
        "  - Enter M to manually decide for each package at each run. [Y/N/M] "
    )


def package_question(package: str, message: str) -> str:
    reason = f"{message}\n" if message else ""
    return (
        f"The node package [{package}] can be installed:\n{reason}"
        "Would you like to install/update it? (if you're not sure, you can safely "
        "press Y to get the package ready to use if you need it later) [Y/N] "
    )


def negotiate(
    requirements: Mapping[str, str],
    confirmations: Mapping[str, str],
    io: HookIO,
    memory: ConfirmationMemory,
) -> dict[str, str]:
    """Filter ``requirements`` down to the packages approved for install.

    Args:
        requirements: Package name → version constraint.
        confirmations: Package name → justification, for packages that
            need approval.
        io: Host IO used for prompting.
        memory: Source of the remembered global answer.

    Returns:
        The approved subset of ``requirements``, in input order.
    """
    if not io.is_interactive():
        logger.debug("Non-interactive run, skipping confirmation")
        return dict(requirements)

    if not confirmations:
        return dict(requirements)

    token = memory.read_choice(lambda: io.ask(global_question(len(confirmations))))
    choice = GlobalChoice.from_token(token)
    logger.debug("Global install choice: %s", choice.name)

    consent: dict[str, bool] = {}
    for package, message in confirmations.items():
        if choice is GlobalChoice.ASK_EACH:
            consent[package] = io.ask_confirmation(package_question(package, message), default=True)
        else:
            consent[package] = choice is GlobalChoice.INSTALL_ALL

    skipped = [name for name, approved in consent.items() if not approved]
    if skipped:
        logger.info("Skipping declined package(s): %s", ", ".join(skipped))

    return {
        name: version
        for name, version in requirements.items()
        if consent.get(name, True)
    }
