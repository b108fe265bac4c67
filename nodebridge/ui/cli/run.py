"""
CLI commands for running scripts through node.

Thin wrappers over ``nodebridge.core.services.node_exec``.
"""

from __future__ import annotations

import importlib
import sys
from typing import Any

import click

from nodebridge.core.errors import BridgeError


def _load_fallback(spec: str | None) -> Any:
    """Import ``package.module:attribute``; the facade checks it is callable."""
    if not spec:
        return None
    module_name, _, attribute = spec.partition(":")
    if not attribute:
        raise click.BadParameter("expected 'module:attribute'", param_hint="--fallback")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import {module_name}: {e}", param_hint="--fallback") from e
    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise click.BadParameter(f"{module_name} has no {attribute}", param_hint="--fallback") from e


def _bridge(ctx: click.Context):
    from nodebridge.core.services.node_exec import NodeBridge
    from nodebridge.main import get_settings

    return NodeBridge(get_settings(ctx))


def _emit(result: Any) -> None:
    if result is None:
        return
    text = result if isinstance(result, str) else str(result)
    click.echo(text, nl=not text.endswith("\n"))


_fallback_option = click.option(
    "--fallback",
    "fallback_spec",
    default=None,
    metavar="MODULE:CALLABLE",
    help="Python callable to run with the script when node is missing.",
)


@click.group()
def run() -> None:
    """Run — shell commands, node scripts and module scripts."""


@run.command("shell")
@click.argument("command")
@_fallback_option
@click.pass_context
def run_shell(ctx: click.Context, command: str, fallback_spec: str | None) -> None:
    """Run COMMAND through the shell when node is installed."""
    fallback = _load_fallback(fallback_spec)
    try:
        _emit(_bridge(ctx).exec(command, fallback))
    except BridgeError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@run.command("script")
@click.argument("script")
@_fallback_option
@click.pass_context
def run_script(ctx: click.Context, script: str, fallback_spec: str | None) -> None:
    """Run SCRIPT with node."""
    fallback = _load_fallback(fallback_spec)
    try:
        _emit(_bridge(ctx).node_exec(script, fallback))
    except BridgeError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@run.command("module")
@click.argument("module")
@click.argument("script")
@click.argument("arguments", nargs=-1, type=click.UNPROCESSED)
@_fallback_option
@click.pass_context
def run_module(
    ctx: click.Context,
    module: str,
    script: str,
    arguments: tuple[str, ...],
    fallback_spec: str | None,
) -> None:
    """Run SCRIPT from node module MODULE with ARGUMENTS.

    Examples:

        nodebridge run module stylus bin/stylus -- --version

        nodebridge run module uglify-js bin/uglifyjs app.js --fallback mypkg.minify:run
    """
    fallback = _load_fallback(fallback_spec)
    try:
        _emit(_bridge(ctx).exec_module_script(module, script, list(arguments), fallback))
    except BridgeError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)
