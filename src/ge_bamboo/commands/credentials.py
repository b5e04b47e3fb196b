# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Commands for shared credentials holding build-scan access keys."""

import logging
import pathlib
from typing import Optional

import typer
from rich.console import Console

from ge_bamboo.commands.common import (
    CONFIG_DIR_ENVVAR,
    CONFIG_DIR_HELP,
    OUTPUT_FORMAT_HELP,
    get_credential_store,
)
from ge_bamboo.core.access_key import parse_access_keys
from ge_bamboo.core.credential_manager import (
    PASSWORD,
    SHARED_USERNAME_PASSWORD_PLUGIN_KEY,
    USERNAME,
    CredentialRecord,
)
from ge_bamboo.core.errors import GeBambooError
from ge_bamboo.core.output import format_and_output, mask_secret

logger = logging.getLogger(__name__)
console = Console()

credentials_app = typer.Typer(help="Manage shared credentials")


@credentials_app.command("list")
def list_credentials(
    config_dir: Optional[pathlib.Path] = typer.Option(
        None, "--config-dir", "-c", help=CONFIG_DIR_HELP, envvar=CONFIG_DIR_ENVVAR
    ),
    output_format: str = typer.Option("table", "--format", "-f", help=OUTPUT_FORMAT_HELP),
) -> None:
    """List shared credentials. Passwords are masked."""
    try:
        credentials = get_credential_store(config_dir).list_credentials()
        data = [
            {
                "name": credential.name,
                "plugin_key": credential.plugin_key,
                "username": credential.configuration.get(USERNAME, ""),
                "password": mask_secret(credential.configuration.get(PASSWORD)),
                "access_key_hosts": [
                    entry.host for entry in parse_access_keys(credential.configuration.get(PASSWORD))
                ],
            }
            for credential in credentials
        ]
        format_and_output(data, output_format, {
            "title": "Shared Credentials",
            "columns": [
                {"name": "Name", "field": "name", "style": "cyan", "no_wrap": True},
                {"name": "Type", "field": "plugin_key"},
                {"name": "Username", "field": "username"},
                {"name": "Password", "field": "password"},
                {"name": "Access Key Hosts", "field": "access_key_hosts", "style": "green"},
            ],
        })
    except (GeBambooError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@credentials_app.command("add")
def add_credentials(
    name: str = typer.Argument(..., help="Shared credential name"),
    config_dir: Optional[pathlib.Path] = typer.Option(
        None, "--config-dir", "-c", help=CONFIG_DIR_HELP, envvar=CONFIG_DIR_ENVVAR
    ),
    username: str = typer.Option("", "--username", "-u", help="Username stored with the credential"),
    password: Optional[str] = typer.Option(
        None, "--password", "-p", help="Password, one host=accessKey entry per line"
    ),
    password_file: Optional[pathlib.Path] = typer.Option(
        None, "--password-file", help="Read the password from a file"
    ),
    plugin_key: str = typer.Option(
        SHARED_USERNAME_PASSWORD_PLUGIN_KEY, "--plugin-key", help="Credential type identifier"
    ),
) -> None:
    """Create or replace a shared credential.

    Examples:
        ge-bamboo credentials add ge-keys --password "ge.example.com=abcd1234"

        ge-bamboo credentials add ge-keys --password-file access-keys.txt
    """
    if password is None and password_file is None:
        console.print("[red]Error: Provide --password or --password-file[/red]")
        raise typer.Exit(1)

    try:
        if password_file is not None:
            password = password_file.read_text()
    except OSError as e:
        console.print(f"[red]Error: Failed to read {password_file}: {e}[/red]")
        raise typer.Exit(1)

    try:
        configuration = {PASSWORD: password or ""}
        if username:
            configuration[USERNAME] = username
        get_credential_store(config_dir).save_credentials(
            CredentialRecord(name=name, plugin_key=plugin_key, configuration=configuration)
        )
        console.print(f"[green]Saved shared credential '{name}'[/green]")
    except GeBambooError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@credentials_app.command("remove")
def remove_credentials(
    name: str = typer.Argument(..., help="Shared credential name"),
    config_dir: Optional[pathlib.Path] = typer.Option(
        None, "--config-dir", "-c", help=CONFIG_DIR_HELP, envvar=CONFIG_DIR_ENVVAR
    ),
) -> None:
    """Delete a shared credential."""
    try:
        if not get_credential_store(config_dir).delete_credentials(name):
            console.print(f"[red]Error: Shared credential '{name}' not found[/red]")
            raise typer.Exit(1)
        console.print(f"[green]Removed shared credential '{name}'[/green]")
    except GeBambooError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
