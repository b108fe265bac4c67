"""
Tests for the npm install driver — command shape, retries, verification.
"""

from pathlib import Path

from helpers import install_side_effect

from nodebridge.adapters.mock import FakeProcessRunner
from nodebridge.core.models.settings import BridgeSettings
from nodebridge.core.services.install_ops import NpmInstaller, package_spec
from nodebridge.core.services.module_paths import ModulePaths


class TestPackageSpec:
    def test_plain(self):
        assert package_spec("less", "^4.0") == 'less@"^4.0"'

    def test_missing_version_is_wildcard(self):
        assert package_spec("less", None) == 'less@"*"'
        assert package_spec("less", "") == 'less@"*"'

    def test_quotes_escaped(self):
        assert package_spec("odd", 'a"b\\c') == 'odd@"a\\"b\\\\c"'


class TestBuildCommand:
    def test_single_command_for_all_packages(self, settings: BridgeSettings, runner):
        installer = NpmInstaller(settings, runner)
        command = installer.build_command({"less": "^4.0", "stylus": "*"})

        assert command.startswith("npm install --force --loglevel=error --prefix ")
        assert str(settings.prefix_path) in command
        assert command.endswith('less@"^4.0" stylus@"*"')

    def test_custom_npm_binary(self, settings: BridgeSettings, runner):
        settings.npm_path = "/opt/node/bin/npm"
        command = NpmInstaller(settings, runner).build_command({"less": "*"})
        assert command.startswith("/opt/node/bin/npm install")


class TestInstall:
    def test_empty_succeeds_without_running(self, settings: BridgeSettings, runner):
        assert NpmInstaller(settings, runner).install({}) is True
        assert runner.call_count == 0

    def test_success_first_attempt(self, settings: BridgeSettings, runner: FakeProcessRunner):
        runner.script("npm install", "added 2 packages",
                      side_effect=install_side_effect(settings, "less", "stylus"))
        installer = NpmInstaller(settings, runner)

        assert installer.install({"less": "^4", "stylus": "*"}) is True
        assert runner.call_count == 1

    def test_on_found_called_per_package_before_run(self, settings: BridgeSettings, runner):
        seen: list[tuple[str, int]] = []
        runner.script("npm install", side_effect=install_side_effect(settings, "less", "stylus"))
        installer = NpmInstaller(settings, runner)

        installer.install(
            {"less": "^4", "stylus": "*"},
            lambda spec: seen.append((spec, runner.call_count)),
        )
        assert seen == [('less@"^4"', 0), ('stylus@"*"', 0)]

    def test_succeeds_on_third_attempt(self, settings: BridgeSettings, runner: FakeProcessRunner):
        settings.max_install_retry = 3
        runner.script("npm install", "npm ERR! network timeout")
        runner.script("npm install", "ok but nothing written")
        runner.script("npm install", "added 1 package",
                      side_effect=install_side_effect(settings, "less"))

        assert NpmInstaller(settings, runner).install({"less": "*"}) is True
        assert runner.call_count == 3

    def test_fails_after_budget(self, settings: BridgeSettings, runner: FakeProcessRunner):
        settings.max_install_retry = 2
        runner.script("npm install", "npm ERR! 404 Not Found")

        assert NpmInstaller(settings, runner).install({"nope": "*"}) is False
        assert runner.call_count == 2

    def test_error_marker_fails_even_if_installed(self, settings: BridgeSettings, runner):
        settings.max_install_retry = 1
        runner.script("npm install", "npm ERR! peer dep",
                      side_effect=install_side_effect(settings, "less"))

        assert NpmInstaller(settings, runner).install({"less": "*"}) is False

    def test_clean_output_but_missing_package_fails(self, settings: BridgeSettings, runner):
        settings.max_install_retry = 1
        runner.script("npm install", "", side_effect=install_side_effect(settings, "less"))

        assert NpmInstaller(settings, runner).install({"less": "*", "stylus": "*"}) is False

    def test_exit_status_is_not_trusted(self, settings: BridgeSettings, runner):
        runner.script("npm install", "warn", returncode=1,
                      side_effect=install_side_effect(settings, "less"))
        assert NpmInstaller(settings, runner).install({"less": "*"}) is True

    def test_custom_error_markers(self, settings: BridgeSettings, runner):
        settings.max_install_retry = 1
        settings.error_markers = ["npm error"]
        runner.script("npm install", "npm error code E404",
                      side_effect=install_side_effect(settings, "less"))
        assert NpmInstaller(settings, runner).install({"less": "*"}) is False


class TestIsInstalledPackage:
    def test_empty_list(self, settings: BridgeSettings, runner):
        assert NpmInstaller(settings, runner).is_installed_package([]) is True

    def test_single_name(self, settings: BridgeSettings, runner):
        installer = NpmInstaller(settings, runner)
        assert installer.is_installed_package("less") is False
        install_side_effect(settings, "less")()
        assert installer.is_installed_package("less") is True

    def test_all_must_exist(self, settings: BridgeSettings, runner):
        install_side_effect(settings, "less")()
        installer = NpmInstaller(settings, runner)
        assert installer.is_installed_package(["less"]) is True
        assert installer.is_installed_package(["less", "stylus"]) is False

    def test_uses_module_overrides(self, settings: BridgeSettings, runner, tmp_path: Path):
        custom = tmp_path / "elsewhere" / "less"
        custom.mkdir(parents=True)
        paths = ModulePaths(settings)
        paths.set_module_path("less", custom)

        assert NpmInstaller(settings, runner, paths).is_installed_package("less") is True
