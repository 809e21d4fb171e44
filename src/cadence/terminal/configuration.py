# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from cadence import configuration
from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("show, v")
def show() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("user_id", config["user_id"])
    table.add_row("due_soon_minutes", str(config["due_soon_minutes"]))
    table.add_row("preview_limit", str(config["preview_limit"]))
    table.add_row("refresh_seconds", str(config["refresh_seconds"]))
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("log_level", config["log_level"])
    table.add_row("data_path", str(configuration.DATA_PATH))

    console.print(table)


@app.command("set, s")
def set(
    user_id: Annotated[
        Optional[str],
        typer.Option("--user", help="User whose read markers are used"),
    ] = None,
    due_soon_minutes: Annotated[
        Optional[int],
        typer.Option(
            "--due-soon-minutes",
            min=1,
            help="Lookahead window for the due-soon bucket",
        ),
    ] = None,
    preview_limit: Annotated[
        Optional[int],
        typer.Option(
            "--preview-limit",
            min=1,
            help="Items shown per kind in compact notifications",
        ),
    ] = None,
    refresh_seconds: Annotated[
        Optional[float],
        typer.Option(
            "--refresh-seconds",
            min=0.1,
            help="Default interval for --watch",
        ),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--no-show-header"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR"),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing data files",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform default",
        ),
    ] = False,
) -> None:
    """Update configuration settings."""
    if log_level is not None and log_level.upper() not in (
        "DEBUG",
        "INFO",
        "WARNING",
        "ERROR",
    ):
        raise typer.BadParameter(f"Invalid log level: {log_level}")

    CONFIGURATION_REPO.update_config(
        user_id=user_id,
        due_soon_minutes=due_soon_minutes,
        preview_limit=preview_limit,
        refresh_seconds=refresh_seconds,
        show_header=show_header,
        log_level=log_level,
        data_path=data_path,
        remove_data_path=remove_data_path,
    )
    show()
