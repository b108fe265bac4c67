"""
Settings model — the process-wide configuration value.

Built once (from nodebridge.yml or defaults) and handed to every
component at construction time.  Components read it on every call,
so updates made through the setters are seen everywhere in the process.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Package directory: default home of node_modules and the reminder file
PACKAGE_DIR = Path(__file__).resolve().parents[2]

DEFAULT_REMINDER_FILE = "npm-confirm-reminded-choice.txt"
DEFAULT_ANSWER_ENV_VAR = "NODEBRIDGE_ANSWER"


class BridgeSettings(BaseModel):
    """Runtime configuration shared by hook, installer and facade."""

    model_config = ConfigDict(validate_assignment=True)

    node_path: str = "node"
    npm_path: str = "npm"
    prefix_path: Path | None = None              # None = package directory
    module_paths: dict[str, Path] = Field(default_factory=dict)

    max_install_retry: int = Field(default=3, ge=1)
    error_markers: list[str] = Field(default_factory=lambda: ["npm ERR!"])
    command_timeout: float | None = None         # None = wait forever

    manifest_name: str = "composer.json"
    manifest_key: str = "npm"

    reminder_path: Path | None = None            # None = beside the package
    answer_env_var: str = DEFAULT_ANSWER_ENV_VAR

    @property
    def confirm_key(self) -> str:
        """Manifest key holding the packages that need confirmation."""
        return f"{self.manifest_key}-confirm"

    @property
    def effective_prefix(self) -> Path:
        return self.prefix_path if self.prefix_path is not None else PACKAGE_DIR

    @property
    def effective_reminder_path(self) -> Path:
        if self.reminder_path is not None:
            return self.reminder_path
        return PACKAGE_DIR / DEFAULT_REMINDER_FILE

    def set_module_path(self, module: str, path: str | Path) -> None:
        """Register a location for a module (last write wins)."""
        self.module_paths[module] = Path(path)

    def set_max_install_retry(self, count: int) -> None:
        self.max_install_retry = count
