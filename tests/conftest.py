"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from nodebridge.adapters.mock import FakeProcessRunner
from nodebridge.core.models.settings import BridgeSettings


@pytest.fixture(autouse=True)
def no_answer_override(monkeypatch):
    """Keep a developer's NODEBRIDGE_ANSWER from leaking into tests."""
    monkeypatch.delenv("NODEBRIDGE_ANSWER", raising=False)


@pytest.fixture
def settings(tmp_path: Path) -> BridgeSettings:
    """Settings with prefix and reminder file inside tmp_path."""
    return BridgeSettings(
        prefix_path=tmp_path / "prefix",
        reminder_path=tmp_path / "state" / "choice.txt",
    )


@pytest.fixture
def runner() -> FakeProcessRunner:
    return FakeProcessRunner()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project root with an empty vendor/ directory; returns vendor/."""
    vendor = tmp_path / "project" / "vendor"
    vendor.mkdir(parents=True)
    return vendor


@pytest.fixture(autouse=True)
def restore_root_logger():
    """CLI tests call setup_logging; undo it so later tests see defaults."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
