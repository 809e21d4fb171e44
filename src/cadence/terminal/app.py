# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from cadence.log import configure_logging
from cadence.terminal import configuration
from cadence.terminal.calendar import agenda, gantt
from cadence.terminal.custom_typer import AliasedTyperGroup
from cadence.terminal.notification import notifications, read, read_all, unread
from cadence.view import state as view_state

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="Cadence - Deadlines, reminders and recurring activities in the CLI",
    no_args_is_help=True,
)
app.add_typer(configuration.app, name="config, c")
app.command(name="notifications, n")(notifications)
app.command(name="read, r")(read)
app.command(name="unread, u")(unread)
app.command(name="read-all, ra")(read_all)
app.command(name="agenda, ag")(agenda)
app.command(name="gantt, g")(gantt)


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in views",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Log at DEBUG level"),
    ] = False,
) -> None:
    """
    Cadence - Deadlines, reminders and recurring activities in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if verbose:
        configure_logging("DEBUG")


def run() -> None:
    app()
