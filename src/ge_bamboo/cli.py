# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Main CLI entry point for ge-bamboo."""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ge_bamboo import __version__
from ge_bamboo.commands.config import config_app
from ge_bamboo.commands.credentials import credentials_app
from ge_bamboo.commands.job import job_app

app = typer.Typer(
    name="ge-bamboo",
    help="Build scan access key injection for Bamboo jobs",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

# Add subcommand groups
app.add_typer(config_app, name="config", help="Manage the build-scan server configuration")
app.add_typer(credentials_app, name="credentials", help="Manage shared credentials")
app.add_typer(job_app, name="job", help="Run the pre-job action and inspect access keys")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None, "--version", "-v", help="Show version information"
    ),
    verbose: Optional[bool] = typer.Option(
        False, "--verbose", "-V", help="Enable verbose logging"
    ),
) -> None:
    """Build scan access key injection for Bamboo jobs."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    if version:
        table = Table(title="ge-bamboo Information")
        table.add_column("Property", style="cyan", no_wrap=True)
        table.add_column("Value", style="magenta")

        table.add_row("Version", __version__)
        table.add_row("Purpose", "Build scan access key injection for Bamboo jobs")
        table.add_row("License", "Apache-2.0")

        console.print(table)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()


if __name__ == "__main__":
    app()
