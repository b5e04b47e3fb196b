# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Commands for the persisted build-scan configuration."""

import logging
import pathlib
from dataclasses import replace
from typing import Optional

import typer
from rich.console import Console

from ge_bamboo.commands.common import (
    CONFIG_DIR_ENVVAR,
    CONFIG_DIR_HELP,
    OUTPUT_FORMAT_HELP,
    get_configuration_manager,
)
from ge_bamboo.core.config import PersistentConfiguration
from ge_bamboo.core.errors import GeBambooError
from ge_bamboo.core.output import format_and_output

logger = logging.getLogger(__name__)
console = Console()

config_app = typer.Typer(help="Manage the build-scan server configuration")


@config_app.command("show")
def show_config(
    config_dir: Optional[pathlib.Path] = typer.Option(
        None, "--config-dir", "-c", help=CONFIG_DIR_HELP, envvar=CONFIG_DIR_ENVVAR
    ),
    output_format: str = typer.Option("table", "--format", "-f", help=OUTPUT_FORMAT_HELP),
) -> None:
    """Show the current configuration."""
    try:
        configuration = get_configuration_manager(config_dir).load()
        if configuration is None:
            console.print("[yellow]No build-scan configuration saved[/yellow]")
            return

        data = [
            {"property": name, "value": value}
            for name, value in configuration.to_dict().items()
        ]
        format_and_output(data, output_format, {
            "title": "Build Scan Configuration",
            "columns": [
                {"name": "Property", "field": "property", "style": "cyan", "no_wrap": True},
                {"name": "Value", "field": "value", "style": "magenta"},
            ],
        })
    except (GeBambooError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@config_app.command("set")
def set_config(
    config_dir: Optional[pathlib.Path] = typer.Option(
        None, "--config-dir", "-c", help=CONFIG_DIR_HELP, envvar=CONFIG_DIR_ENVVAR
    ),
    server: Optional[str] = typer.Option(None, "--server", "-s", help="Build-scan server URL"),
    shared_credential: Optional[str] = typer.Option(
        None, "--shared-credential", help="Name of the shared credential holding access keys"
    ),
    plugin_version: Optional[str] = typer.Option(
        None, "--plugin-version", help="Gradle Enterprise Gradle plugin version"
    ),
    ccud_plugin_version: Optional[str] = typer.Option(
        None, "--ccud-plugin-version", help="Common Custom User Data Gradle plugin version"
    ),
    allow_untrusted_server: Optional[bool] = typer.Option(
        None, "--allow-untrusted-server/--no-allow-untrusted-server",
        help="Allow servers with untrusted TLS certificates"
    ),
    inject_maven_extension: Optional[bool] = typer.Option(
        None, "--inject-maven-extension/--no-inject-maven-extension",
        help="Enable build scans for Maven builds"
    ),
) -> None:
    """Update configuration values. Options not given keep their value.

    Examples:
        ge-bamboo config set --server https://ge.example.com --shared-credential ge-keys

        ge-bamboo config set --plugin-version 3.12 --inject-maven-extension
    """
    try:
        manager = get_configuration_manager(config_dir)
        configuration = manager.load() or PersistentConfiguration()

        changes = {
            "server": server,
            "shared_credential_name": shared_credential,
            "ge_plugin_version": plugin_version,
            "ccud_plugin_version": ccud_plugin_version,
            "allow_untrusted_server": allow_untrusted_server,
            "inject_maven_extension": inject_maven_extension,
        }
        changes = {name: value for name, value in changes.items() if value is not None}
        if not changes:
            console.print("[yellow]Nothing to update[/yellow]")
            return

        manager.save(replace(configuration, **changes))
        console.print(f"[green]Updated {', '.join(sorted(changes))}[/green]")
    except GeBambooError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@config_app.command("clear")
def clear_config(
    config_dir: Optional[pathlib.Path] = typer.Option(
        None, "--config-dir", "-c", help=CONFIG_DIR_HELP, envvar=CONFIG_DIR_ENVVAR
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Remove the saved configuration."""
    if not yes and not typer.confirm("Remove the build-scan configuration?"):
        raise typer.Exit()

    try:
        get_configuration_manager(config_dir).clear()
        console.print("[green]Configuration removed[/green]")
    except GeBambooError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
