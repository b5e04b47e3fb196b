# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""
Job commands for ge-bamboo.

These commands drive the pre-job action from the command line: run it
against a job description, show the access key it would resolve, and check
that the configured build-scan server is reachable.
"""

import logging
import pathlib
from typing import Optional

import typer
from rich.console import Console

from ge_bamboo.commands.common import (
    CONFIG_DIR_ENVVAR,
    CONFIG_DIR_HELP,
    OUTPUT_FORMAT_HELP,
    get_configuration_manager,
    get_credential_store,
)
from ge_bamboo.core.access_key import resolve_access_key
from ge_bamboo.core.connectivity import ServerChecker
from ge_bamboo.core.credential_manager import UsernameAndPasswordCredentialsProvider
from ge_bamboo.core.errors import GeBambooError
from ge_bamboo.core.job_context import load_job
from ge_bamboo.core.output import format_and_output, mask_secret
from ge_bamboo.core.pre_job_action import PreJobAction

logger = logging.getLogger(__name__)
console = Console()
err_console = Console(stderr=True)

job_app = typer.Typer(help="Run the pre-job action and inspect access keys")


@job_app.command("run")
def run_pre_job_action(
    job_file: pathlib.Path = typer.Argument(..., help="YAML job description"),
    config_dir: Optional[pathlib.Path] = typer.Option(
        None, "--config-dir", "-c", help=CONFIG_DIR_HELP, envvar=CONFIG_DIR_ENVVAR
    ),
    output_format: str = typer.Option("table", "--format", "-f", help=OUTPUT_FORMAT_HELP),
    show_secrets: bool = typer.Option(False, "--show-secrets", help="Print variable values unmasked"),
) -> None:
    """Run the pre-job action against a job description.

    The job's variables are printed after the action has run. A skipped
    injection is not an error.

    Examples:
        ge-bamboo job run job.yaml

        ge-bamboo job run job.yaml --format json --show-secrets
    """
    try:
        job = load_job(job_file)
        action = PreJobAction(
            get_configuration_manager(config_dir),
            UsernameAndPasswordCredentialsProvider(get_credential_store(config_dir)),
        )
        result = action.execute(job)

        if result.injected:
            err_console.print(f"[green]Injected {result.variable_name} into job {job.key or job_file}[/green]")
        else:
            err_console.print(f"[yellow]Skipped: {result.skip_reason.value}[/yellow]")

        local_variables = job.variable_context().local_variables
        data = [
            {
                "name": name,
                "value": value if show_secrets else mask_secret(value),
                "scope": "local" if name in local_variables else "inherited",
            }
            for name, value in job.variable_context().effective_variables.items()
        ]
        format_and_output(data, output_format, {
            "title": "Job Variables",
            "columns": [
                {"name": "Variable", "field": "name", "style": "cyan", "no_wrap": True},
                {"name": "Value", "field": "value"},
                {"name": "Scope", "field": "scope", "style": "magenta"},
            ],
        })
    except (GeBambooError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@job_app.command("resolve-key")
def resolve_key(
    config_dir: Optional[pathlib.Path] = typer.Option(
        None, "--config-dir", "-c", help=CONFIG_DIR_HELP, envvar=CONFIG_DIR_ENVVAR
    ),
    server: Optional[str] = typer.Option(
        None, "--server", "-s", help="Server URL (defaults to the configured server)"
    ),
    show_secrets: bool = typer.Option(False, "--show-secrets", help="Print the key unmasked"),
) -> None:
    """Show the access key the configured shared credential holds for a server."""
    try:
        configuration = get_configuration_manager(config_dir).load()
        if configuration is None or configuration.shared_credential_name is None:
            console.print("[red]Error: No shared credential configured[/red]")
            raise typer.Exit(1)

        server_url = server or configuration.server
        if not server_url:
            console.print("[red]Error: No server configured, use --server[/red]")
            raise typer.Exit(1)

        provider = UsernameAndPasswordCredentialsProvider(get_credential_store(config_dir))
        credentials = provider.find_username_and_password(configuration.shared_credential_name)
        if credentials is None:
            console.print(
                f"[red]Error: Shared credential '{configuration.shared_credential_name}' "
                f"not found or not a username and password credential[/red]"
            )
            raise typer.Exit(1)

        access_key = resolve_access_key(server_url, credentials.password)
        if access_key is None:
            console.print(f"[red]Error: No access key for {server_url}[/red]")
            raise typer.Exit(1)

        typer.echo(access_key if show_secrets else mask_secret(access_key))
    except GeBambooError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@job_app.command("check-server")
def check_server(
    config_dir: Optional[pathlib.Path] = typer.Option(
        None, "--config-dir", "-c", help=CONFIG_DIR_HELP, envvar=CONFIG_DIR_ENVVAR
    ),
    timeout: int = typer.Option(5, "--timeout", "-t", help="Timeout in seconds"),
) -> None:
    """Check that the configured build-scan server is reachable."""
    try:
        configuration = get_configuration_manager(config_dir).load()
    except GeBambooError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if configuration is None or configuration.server is None:
        console.print("[red]Error: No server configured[/red]")
        raise typer.Exit(1)

    checker = ServerChecker(timeout=timeout, allow_untrusted=configuration.allow_untrusted_server)
    result = checker.check(configuration.server)
    console.print(f"{result.display} {result.url}")
    if not result.reachable:
        raise typer.Exit(1)
