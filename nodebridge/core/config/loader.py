"""
Configuration loader — reads nodebridge.yml into BridgeSettings.

The file is optional.  Without it every component runs on defaults,
which is what a package-manager hook gets on a fresh project.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from nodebridge.core.errors import ConfigError
from nodebridge.core.models.settings import BridgeSettings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "nodebridge.yml"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for nodebridge.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to nodebridge.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None) -> BridgeSettings:
    """Load and validate nodebridge settings.

    Args:
        path: Explicit path to nodebridge.yml. If None, searches upward
            and falls back to defaults when nothing is found.

    Returns:
        Validated BridgeSettings.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    explicit = path is not None
    if path is None:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found — using defaults", CONFIG_FILE)
        return BridgeSettings()

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return BridgeSettings()

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return BridgeSettings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "nodebridge" key or be flat
    settings_data = data.get("nodebridge", data)
    if not isinstance(settings_data, dict):
        raise ConfigError(f"Expected a mapping under 'nodebridge' in {path}")

    # Relative paths are relative to the config file, not the cwd
    base = path.parent.resolve()
    for key in ("prefix_path", "reminder_path"):
        value = settings_data.get(key)
        if isinstance(value, str) and value:
            settings_data[key] = _anchor(base, value)
    modules = settings_data.get("module_paths")
    if isinstance(modules, dict):
        settings_data["module_paths"] = {
            name: _anchor(base, location) if isinstance(location, str) else location
            for name, location in modules.items()
        }

    try:
        settings = BridgeSettings.model_validate(settings_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid nodebridge configuration: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings


def _anchor(base: Path, value: str) -> Path:
    candidate = Path(value).expanduser()
    return candidate if candidate.is_absolute() else base / candidate
