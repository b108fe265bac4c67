"""
Confirmation memory — ask once, remember the global answer.

Resolution order for the global choice token:

    1. the answer environment variable, if set and non-empty
       (returned verbatim, never persisted)
    2. the stored token from a previous run
    3. a fresh prompt, whose lower-cased answer is stored

A prompt that fails (closed stdin, host IO error) counts as "y" so a
broken terminal never blocks the installation.
"""

from __future__ import annotations

import enum
import logging
import os
from collections.abc import Callable

from nodebridge.core.models.settings import DEFAULT_ANSWER_ENV_VAR, BridgeSettings
from nodebridge.core.persistence.choice_store import ChoiceStore, FileChoiceStore

logger = logging.getLogger(__name__)


class GlobalChoice(enum.Enum):
    """How packages that need confirmation are handled."""

    INSTALL_ALL = "y"
    SKIP_ALL = "n"
    ASK_EACH = "m"

    @classmethod
    def from_token(cls, token: str | None) -> GlobalChoice:
        """Map a stored token to a choice; anything but y/n means ask each."""
        normalized = (token or "").strip().lower()
        if normalized == "y":
            return cls.INSTALL_ALL
        if normalized == "n":
            return cls.SKIP_ALL
        return cls.ASK_EACH


class ConfirmationMemory:
    """Persisted global answer with an environment override."""

    def __init__(self, store: ChoiceStore, env_var: str = DEFAULT_ANSWER_ENV_VAR):
        self.store = store
        self.env_var = env_var

    @classmethod
    def from_settings(cls, settings: BridgeSettings) -> ConfirmationMemory:
        return cls(FileChoiceStore(settings.effective_reminder_path), settings.answer_env_var)

    def env_override(self) -> str | None:
        answer = os.environ.get(self.env_var)
        if isinstance(answer, str) and answer != "":
            return answer
        return None

    def read_choice(self, ask: Callable[[], str]) -> str:
        """Return the global choice token, prompting with ``ask`` if needed."""
        override = self.env_override()
        if override is not None:
            logger.debug("Global choice from $%s: %s", self.env_var, override)
            return override

        stored = self.store.get()
        if stored is not None:
            logger.debug("Global choice from store: %s", stored)
            return stored

        try:
            answer = (ask() or "").lower()
        except Exception as e:
            logger.warning("Could not ask for the global install choice (%s), installing all", e)
            return GlobalChoice.INSTALL_ALL.value

        self.write_choice(answer)
        return answer

    def write_choice(self, token: str) -> None:
        """Persist a token; a write failure only loses the memory, not the answer."""
        try:
            self.store.set(token.lower())
        except OSError as e:
            logger.warning("Could not remember the install choice: %s", e)

    def reset(self) -> None:
        """Forget the stored choice so the next run prompts again."""
        self.store.clear()
