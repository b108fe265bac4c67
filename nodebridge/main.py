"""
nodebridge — CLI entrypoint.

Usage:
    nodebridge --help
    nodebridge install --vendor-dir vendor
    nodebridge requirements --json
    nodebridge run module some-package bin/cli.js -- --flag
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from nodebridge import __version__
from nodebridge.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="nodebridge")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to nodebridge.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """nodebridge — npm dependencies for package manifests, node with a fallback."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("NODEBRIDGE_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("NODEBRIDGE_LOG_FILE"),
        log_file_level=os.environ.get("NODEBRIDGE_LOG_FILE_LEVEL"),
    )


def get_settings(ctx: click.Context):
    """Load settings once per invocation; exit 1 on a bad config file."""
    from nodebridge.core.config.loader import load_settings
    from nodebridge.core.errors import ConfigError

    if "settings" not in ctx.obj:
        try:
            ctx.obj["settings"] = load_settings(ctx.obj.get("config_path"))
        except ConfigError as e:
            click.secho(f"❌ {e}", fg="red")
            sys.exit(1)
    return ctx.obj["settings"]


@cli.command()
@click.option(
    "--vendor-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("vendor"),
    show_default=True,
    help="Directory the package manager installs dependencies into.",
)
@click.option("--no-interaction", "-n", is_flag=True, help="Never prompt; install everything.")
@click.pass_context
def install(ctx: click.Context, vendor_dir: Path, no_interaction: bool) -> None:
    """Install the npm packages declared by the dependency tree."""
    from nodebridge.adapters.io.console import ConsoleIO
    from nodebridge.core.hooks import install_hook
    from nodebridge.core.models.host import InstallEvent
    from nodebridge.core.services.manifest_ops import read_manifest

    settings = get_settings(ctx)
    root_manifest = read_manifest(vendor_dir.parent, settings.manifest_name) or {}
    extra = root_manifest.get("extra")

    event = InstallEvent(
        vendor_dir=vendor_dir,
        io=ConsoleIO(interactive=False if no_interaction else None),
        extra=extra if isinstance(extra, dict) else {},
    )

    if not install_hook(event, settings=settings, route_logs=False):
        sys.exit(1)


@cli.command()
@click.option(
    "--vendor-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("vendor"),
    show_default=True,
    help="Directory the package manager installs dependencies into.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def requirements(ctx: click.Context, vendor_dir: Path, as_json: bool) -> None:
    """Show the merged npm requirements and the packages needing confirmation."""
    from nodebridge.core.services.manifest_ops import (
        collect_confirmations,
        collect_requirements,
    )

    settings = get_settings(ctx)
    packages = collect_requirements(vendor_dir, settings.manifest_key, settings.manifest_name)
    confirm = collect_confirmations(
        vendor_dir, key=settings.confirm_key, manifest_name=settings.manifest_name
    )

    if as_json:
        click.echo(json.dumps({"packages": packages, "confirm": confirm}, indent=2))
        return

    if not packages:
        click.secho("⚠️  No npm packages declared", fg="yellow")
        return

    click.secho(f"📦 npm packages ({len(packages)}):", fg="cyan", bold=True)
    for name, version in packages.items():
        marker = " (needs confirmation)" if name in confirm else ""
        click.echo(f"   {name:<30} {version}{marker}")
    click.echo()


@cli.command("forget-choice")
@click.pass_context
def forget_choice(ctx: click.Context) -> None:
    """Forget the remembered Y/N/M answer so the next install asks again."""
    from nodebridge.core.hooks import forget_confirm_reminded_choice

    settings = get_settings(ctx)
    forget_confirm_reminded_choice(settings)
    if not ctx.obj.get("quiet"):
        click.secho("✅ Install choice forgotten", fg="green")


@cli.command()
@click.argument("packages", nargs=-1)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, packages: tuple[str, ...], as_json: bool) -> None:
    """Check that node is available and that PACKAGES are installed."""
    from nodebridge.core.services.install_ops import NpmInstaller
    from nodebridge.core.services.node_exec import NodeBridge

    settings = get_settings(ctx)
    bridge = NodeBridge(settings)
    installer = NpmInstaller(settings, runner=bridge.runner, paths=bridge.paths)

    node_version = bridge.node_version()
    installed = {name: installer.is_installed_package(name) for name in packages}
    ok = node_version is not None and all(installed.values())

    if as_json:
        click.echo(json.dumps({
            "node": node_version,
            "node_modules": str(bridge.paths.node_modules_dir),
            "packages": installed,
            "ok": ok,
        }, indent=2))
        sys.exit(0 if ok else 1)

    if node_version:
        click.secho(f"✅ node {node_version}", fg="green")
    else:
        click.secho(f"❌ node not found ({settings.node_path})", fg="red")

    for name, present in installed.items():
        if present:
            click.secho(f"   ✓ {name}", fg="green")
        else:
            click.secho(f"   ✗ {name}", fg="red", nl=False)
            click.echo(f"  → {bridge.paths.resolve(name)}")

    if not ok:
        sys.exit(1)


# ── Register sub-command groups from nodebridge/ui/cli/ ───────────

from nodebridge.ui.cli.run import run  # noqa: E402

cli.add_command(run)


if __name__ == "__main__":
    cli()
