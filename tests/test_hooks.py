"""
Tests for the install hook — aggregate → negotiate → install, end to end.
"""

import logging
from pathlib import Path

from helpers import install_side_effect, write_manifest

from nodebridge.adapters.io.buffer import BufferIO
from nodebridge.adapters.mock import FakeProcessRunner
from nodebridge.core.hooks import forget_confirm_reminded_choice, install_hook
from nodebridge.core.models.host import HookEvent, InstallEvent
from nodebridge.core.models.settings import BridgeSettings
from nodebridge.core.persistence.choice_store import MemoryChoiceStore
from nodebridge.core.services.confirmation import ConfirmationMemory


def _event(vendor: Path, io: BufferIO, extra: dict | None = None) -> InstallEvent:
    return InstallEvent(vendor_dir=vendor, io=io, extra=extra or {})


class TestInstallEvent:
    def test_satisfies_protocol(self, project: Path):
        assert isinstance(_event(project, BufferIO()), HookEvent)


class TestInstallHook:
    def test_no_packages_with_setting(self, project, settings, runner):
        io = BufferIO()
        assert install_hook(_event(project, io, {"npm": []}), settings, runner) is True
        assert io.output == ["No packages found."]
        assert runner.call_count == 0

    def test_no_packages_without_setting_warns(self, project, settings, runner):
        io = BufferIO()
        install_hook(_event(project, io), settings, runner)
        assert len(io.output) == 1
        assert io.output[0].startswith("Warning:")
        assert "'npm'" in io.output[0]

    def test_installs_everything(self, project, settings, runner: FakeProcessRunner):
        write_manifest(project / "acme" / "css", {"extra": {"npm": {"less": "^4"}}})
        write_manifest(project.parent, {"extra": {"npm": ["stylus"]}})
        runner.script("npm install", side_effect=install_side_effect(settings, "less", "stylus"))
        io = BufferIO()

        assert install_hook(_event(project, io), settings, runner) is True
        assert io.output == [
            'Package added to be installed/updated with npm: less@"^4"',
            'Package added to be installed/updated with npm: stylus@"*"',
            "Packages installed.",
        ]
        assert io.errors == []
        assert runner.call_count == 1

    def test_failure_is_reported_not_raised(self, project, settings, runner: FakeProcessRunner):
        settings.max_install_retry = 2
        write_manifest(project / "acme" / "css", {"extra": {"npm": ["less"]}})
        runner.script("npm install", "npm ERR! 404")
        io = BufferIO()

        assert install_hook(_event(project, io), settings, runner, route_logs=False) is False
        assert io.errors == ["Installation failed after 2 tries."]
        assert runner.call_count == 2

    def test_warnings_routed_to_host(self, project, settings, runner: FakeProcessRunner, caplog):
        caplog.set_level(logging.WARNING, logger="nodebridge")
        settings.max_install_retry = 1
        write_manifest(project / "acme" / "css", {"extra": {"npm": ["less"]}})
        runner.script("npm install", "npm ERR! 404")
        io = BufferIO()

        install_hook(_event(project, io), settings, runner)
        assert io.errors[-1] == "Installation failed after 1 tries."
        assert any("npm ERR!" in line for line in io.errors[:-1])

    def test_declined_package_not_installed(self, project, settings, runner: FakeProcessRunner):
        write_manifest(
            project / "acme" / "css",
            {"extra": {"npm": {"less": "*", "stylus": "*"}, "npm-confirm": {"stylus": "Optional."}}},
        )
        runner.script("npm install", side_effect=install_side_effect(settings, "less"))
        io = BufferIO(interactive=True, answers=["n"])

        assert install_hook(_event(project, io), settings, runner) is True
        assert "stylus" not in runner.calls[0]
        assert 'less@"*"' in runner.calls[0]
        assert settings.reminder_path.read_text() == "n"

    def test_root_extra_confirmation(self, project, settings, runner: FakeProcessRunner):
        write_manifest(project / "acme" / "css", {"extra": {"npm": ["less"]}})
        io = BufferIO(interactive=True, answers=["m"], confirmations=[False])
        memory = ConfirmationMemory(MemoryChoiceStore())

        extra = {"npm-confirm": {"less": "Only needed for themes."}}
        assert install_hook(_event(project, io, extra), settings, runner, memory=memory) is True
        assert runner.call_count == 0
        assert "Only needed for themes." in io.questions[1]

    def test_non_interactive_installs_confirmable(self, project, settings, runner):
        write_manifest(
            project / "acme" / "css",
            {"extra": {"npm": ["less"], "npm-confirm": {"less": "Optional."}}},
        )
        runner.script("npm install", side_effect=install_side_effect(settings, "less"))
        io = BufferIO(interactive=False)

        assert install_hook(_event(project, io), settings, runner) is True
        assert io.questions == []
        assert not settings.reminder_path.exists()

    def test_custom_manifest_key(self, project, settings, runner: FakeProcessRunner):
        settings.manifest_key = "node"
        write_manifest(project / "acme" / "css", {"extra": {"node": ["less"], "npm": ["other"]}})
        runner.script("npm install", side_effect=install_side_effect(settings, "less"))

        assert install_hook(_event(project, BufferIO()), settings, runner) is True
        assert "other" not in runner.calls[0]

    def test_host_handler_detached(self, project, settings, runner):
        before = list(logging.getLogger("nodebridge").handlers)
        install_hook(_event(project, BufferIO()), settings, runner)
        assert logging.getLogger("nodebridge").handlers == before


class TestForgetChoice:
    def test_removes_file(self, settings: BridgeSettings):
        settings.reminder_path.parent.mkdir(parents=True)
        settings.reminder_path.write_text("n")
        forget_confirm_reminded_choice(settings)
        assert not settings.reminder_path.exists()

    def test_noop_when_absent(self, settings: BridgeSettings):
        forget_confirm_reminded_choice(settings)
        assert not settings.reminder_path.exists()
