"""
Test helpers shared across modules.
"""

import json
from pathlib import Path

from nodebridge.core.models.settings import BridgeSettings


def write_manifest(directory: Path, data, name: str = "composer.json") -> Path:
    """Write a manifest (dict → JSON, str → raw text) into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(data if isinstance(data, str) else json.dumps(data))
    return path


def install_side_effect(settings: BridgeSettings, *packages: str):
    """Side effect creating node_modules/<pkg> like a successful npm run."""

    def create() -> None:
        for name in packages:
            (settings.effective_prefix / "node_modules" / name).mkdir(parents=True, exist_ok=True)

    return create
