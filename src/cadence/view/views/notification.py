# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console, Group, RenderableType
from rich.table import Table
from rich.text import Text

from cadence.color import (
    DUE_SOON_COLOR,
    OVERDUE_COLOR,
    READ_COLOR,
    RUNNING_TIMER_COLOR,
)
from cadence.errors import ErrorReport
from cadence.model.deadline_item import DeadlineKind
from cadence.model.notification import Aggregation, Bucketed
from cadence.service.deadline import DEADLINE_KINDS, countdown
from cadence.time import datetime_to_display_local_datetime_str
from cadence.view.views.header import header

KIND_TITLES: dict[DeadlineKind, str] = {
    "task_reminder": "Task reminders",
    "sprint_deadline": "Sprint deadlines",
    "task_slot": "Task slots",
}


def _style_for(bucketed: Bucketed) -> str:
    if bucketed["is_read"]:
        return READ_COLOR
    if bucketed["item"]["has_running_timer"]:
        return RUNNING_TIMER_COLOR
    if bucketed["classification"] == "overdue":
        return OVERDUE_COLOR
    return DUE_SOON_COLOR


def _bucket_table(
    title: str, total: int, rows: list[Bucketed], now: pendulum.DateTime
) -> Table:
    shown_suffix = f" (showing {len(rows)})" if len(rows) < total else ""
    table = Table(
        title=f"{title}: {total}{shown_suffix}", box=box.SIMPLE, title_justify="left"
    )
    table.add_column("kind")
    table.add_column("id")
    table.add_column("label")
    table.add_column("parent")
    table.add_column("deadline")
    table.add_column("countdown", justify="right")
    table.add_column("")

    for bucketed in rows:
        item = bucketed["item"]
        item_countdown = countdown(bucketed["deadline_at"], now)
        style = _style_for(bucketed)
        table.add_row(
            item["kind"],
            item["id"],
            item["label"],
            item["parent_ref"] or "",
            datetime_to_display_local_datetime_str(bucketed["deadline_at"]),
            item_countdown["formatted"],
            "overdue" if item_countdown["is_past"] else "remaining",
            style=style,
        )
    return table


def build_notifications(
    aggregation: Aggregation,
    kinds: Optional[list[DeadlineKind]] = None,
    compact: bool = False,
) -> RenderableType:
    """
    Build the notification panel for one aggregation.

    The full layout lists every item of the due-soon and overdue buckets.
    The compact layout shows per-kind previews capped by the aggregation's
    preview limit, with the true totals in each title.
    """
    now = aggregation["now"]
    summary = Text.assemble(
        ("Notifications ", "bold"),
        (str(aggregation["total_count"]), "bold"),
        ("  unread ", "dim"),
        (str(aggregation["unread_count"]), "bold"),
    )
    elements: list[RenderableType] = [summary]

    selected_kinds = [kind for kind in DEADLINE_KINDS if not kinds or kind in kinds]

    if compact:
        for kind in selected_kinds:
            kind_buckets = aggregation["by_kind"][kind]
            for label, preview in (
                ("overdue", kind_buckets["overdue"]),
                ("due soon", kind_buckets["due_soon"]),
            ):
                if preview["total"] == 0:
                    continue
                elements.append(
                    _bucket_table(
                        f"{KIND_TITLES[kind]} {label}",
                        preview["total"],
                        preview["shown"],
                        now,
                    )
                )
    else:
        overdue = [b for b in aggregation["overdue"] if b["item"]["kind"] in selected_kinds]
        due_soon = [
            b for b in aggregation["due_soon"] if b["item"]["kind"] in selected_kinds
        ]
        elements.append(_bucket_table("Overdue", len(overdue), overdue, now))
        elements.append(_bucket_table("Due soon", len(due_soon), due_soon, now))

    if aggregation["unclassifiable"]:
        elements.append(
            Text(
                "Unclassifiable: "
                + ", ".join(
                    f"{item['kind']}:{item['id']}"
                    for item in aggregation["unclassifiable"]
                ),
                style="yellow",
            )
        )

    return Group(*elements)


def notifications_view(
    user_id: str,
    aggregation: Aggregation,
    kinds: Optional[list[DeadlineKind]] = None,
    compact: bool = False,
) -> None:
    header(user_id, "notifications", as_of=aggregation["now"])
    console = Console()
    console.print(build_notifications(aggregation, kinds, compact))


def errors_view(reports: list[ErrorReport]) -> None:
    if not reports:
        return
    console = Console(stderr=True)
    for report in reports:
        subject = ""
        if report["entity_kind"] is not None or report["entity_id"] is not None:
            subject = f" [{report['entity_kind'] or ''}:{report['entity_id'] or ''}]"
        console.print(
            f"[yellow]{report['error_kind']}[/yellow]{subject} {report['message']}",
            highlight=False,
        )
