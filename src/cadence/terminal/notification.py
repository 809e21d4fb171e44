# SPDX-License-Identifier: MIT

import time
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.live import Live

from cadence.clock import SYSTEM_CLOCK
from cadence.errors import ErrorReport
from cadence.model.deadline_item import DeadlineFilter
from cadence.model.notification import NotificationPass
from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.repository.deadline_item import DEADLINE_ITEM_REPO
from cadence.repository.read_marker import READ_MARKER_REPO
from cadence.service.notification import compute_notifications
from cadence.service.read_state import ReadStateStore
from cadence.service.reminder import ReminderAnnouncer
from cadence.terminal.parse import parse_kind
from cadence.view.views.header import header
from cadence.view.views.notification import (
    build_notifications,
    errors_view,
    notifications_view,
)


def _read_state_store() -> tuple[ReadStateStore, list[ErrorReport]]:
    config = CONFIGURATION_REPO.get_config()
    store = ReadStateStore(config["user_id"], READ_MARKER_REPO)
    report = store.load()
    return store, [] if report is None else [report]


def _run_pass(
    store: ReadStateStore, deadline_filter: Optional[DeadlineFilter]
) -> NotificationPass:
    config = CONFIGURATION_REPO.get_config()
    return compute_notifications(
        DEADLINE_ITEM_REPO,
        store,
        SYSTEM_CLOCK.freeze(),
        CONFIGURATION_REPO.get_due_soon_window(),
        preview_limit=config["preview_limit"],
        filter=deadline_filter,
    )


def notifications(
    kind: Annotated[
        Optional[str],
        typer.Option(
            "--kind",
            "-k",
            help="task_reminder, sprint_deadline, task_slot",
        ),
    ] = None,
    compact: Annotated[
        bool,
        typer.Option("--compact", "-c", help="Per-kind previews only"),
    ] = False,
    watch: Annotated[
        bool,
        typer.Option("--watch", "-w", help="Keep recomputing on a timer"),
    ] = False,
    interval: Annotated[
        Optional[float],
        typer.Option("--interval", "-i", help="Seconds between recomputations"),
    ] = None,
) -> None:
    """Show due-soon and overdue items with live countdowns."""
    config = CONFIGURATION_REPO.get_config()
    deadline_kind = parse_kind(kind)
    kinds = None if deadline_kind is None else [deadline_kind]
    deadline_filter: Optional[DeadlineFilter] = (
        None if deadline_kind is None else {"kinds": [deadline_kind]}
    )

    store, load_errors = _read_state_store()

    if not watch:
        notification_pass = _run_pass(store, deadline_filter)
        errors_view(load_errors + notification_pass["errors"])
        aggregation = notification_pass["aggregation"]
        if aggregation is None:
            raise typer.Exit(1)
        notifications_view(config["user_id"], aggregation, kinds, compact)
        return

    refresh_seconds = interval if interval is not None else config["refresh_seconds"]
    announcer = ReminderAnnouncer()
    console = Console()
    errors_view(load_errors)
    header(config["user_id"], "notifications")

    try:
        with Live(console=console, auto_refresh=False) as live:
            while True:
                notification_pass = _run_pass(store, deadline_filter)
                aggregation = notification_pass["aggregation"]
                for report in notification_pass["errors"]:
                    live.console.print(
                        f"[yellow]{report['error_kind']}[/yellow] {report['message']}"
                    )
                if aggregation is not None:
                    for item in announcer.pending(aggregation):
                        live.console.print(
                            f"[bold dark_orange]Reminder:[/bold dark_orange] {item['label']}"
                        )
                    live.update(
                        build_notifications(aggregation, kinds, compact), refresh=True
                    )
                time.sleep(refresh_seconds)
    except KeyboardInterrupt:
        pass


def read(
    kind: str,
    id: str,
) -> None:
    """Mark an item as read."""
    deadline_kind = parse_kind(kind)
    assert deadline_kind is not None
    store, load_errors = _read_state_store()
    errors_view(load_errors)

    report = store.mark_read(deadline_kind, id)
    if report is not None:
        errors_view([report])
        raise typer.Exit(1)
    typer.echo(f"Marked {kind} {id} as read")


def unread(
    kind: str,
    id: str,
) -> None:
    """Mark an item as unread."""
    deadline_kind = parse_kind(kind)
    assert deadline_kind is not None
    store, load_errors = _read_state_store()
    errors_view(load_errors)

    report = store.mark_unread(deadline_kind, id)
    if report is not None:
        errors_view([report])
        raise typer.Exit(1)
    typer.echo(f"Marked {kind} {id} as unread")


def read_all(
    kind: Annotated[
        Optional[str],
        typer.Option(
            "--kind",
            "-k",
            help="task_reminder, sprint_deadline, task_slot",
        ),
    ] = None,
) -> None:
    """Mark every currently due-soon or overdue item as read."""
    deadline_kind = parse_kind(kind)
    store, load_errors = _read_state_store()
    notification_pass = _run_pass(store, None)
    errors_view(load_errors + notification_pass["errors"])
    aggregation = notification_pass["aggregation"]
    if aggregation is None:
        raise typer.Exit(1)

    unread_before = len(
        [
            bucketed
            for bucketed in aggregation["overdue"] + aggregation["due_soon"]
            if not bucketed["is_read"]
            and (deadline_kind is None or bucketed["item"]["kind"] == deadline_kind)
        ]
    )
    reports = store.mark_all_read(aggregation, deadline_kind)
    errors_view(reports)
    typer.echo(f"Marked {unread_before - len(reports)} item(s) as read")
    if reports:
        raise typer.Exit(1)
