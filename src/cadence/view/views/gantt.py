# SPDX-License-Identifier: MIT

import pendulum
from rich.console import Console, Group
from rich.padding import Padding
from rich.text import Text

from cadence.color import GANTT_BAR_COLOR, GANTT_HIDDEN_COLOR
from cadence.model.timeline import TimelineBar, TimelineItem
from cadence.view.views.header import header


def bar_cells(bar: TimelineBar, width: int) -> tuple[int, int]:
    """Convert percentages into a (start cell, cell count) pair, at least one cell wide."""
    start = min(width - 1, round(bar["offset_percent"] / 100 * width))
    end = round((bar["offset_percent"] + bar["width_percent"]) / 100 * width)
    return start, max(1, min(width, end) - start)


def _build_row(
    item: TimelineItem, bar: TimelineBar, left_column_width: int, chart_width: int
) -> Text:
    label = item["label"]
    if item["parent_ref"]:
        label = f"{item['parent_ref']}: {label}"
    if len(label) > left_column_width - 1:
        label = label[: left_column_width - 2] + "…"

    row = Text(label.ljust(left_column_width))
    start, cells = bar_cells(bar, chart_width)
    row.append(" " * start)
    row.append(
        "█" * cells, style=GANTT_BAR_COLOR if bar["visible"] else GANTT_HIDDEN_COLOR
    )
    row.append(" " * (chart_width - start - cells))
    return row


def gantt_view(
    user_id: str,
    report_name: str,
    window_start: pendulum.Date,
    window_end: pendulum.Date,
    bars: list[tuple[TimelineItem, TimelineBar]],
    left_column_width: int = 30,
) -> None:
    """
    Display timeline items as bars across a date window.

    Args:
        user_id: The active user
        report_name: Sub-header text
        window_start: First visible day
        window_end: Last visible day
        bars: Items with their precomputed layout
        left_column_width: Width of the label column
    """
    header(user_id, report_name)

    console = Console()
    chart_width = max(10, console.width - left_column_width - 1)

    date_range_str = (
        f"{window_start.format('YYYY-MM-DD')} to {window_end.format('YYYY-MM-DD')}"
    )
    console.print(f"\n[bold]{date_range_str}[/bold]\n")

    if not bars:
        console.print("[dim]No timeline items in this window[/dim]\n")
        return

    chart_elements = [
        Text(
            " " * left_column_width
            + window_start.format("MMM D").ljust(chart_width - 6)
            + window_end.format("MMM D").rjust(6),
            style="dim",
        ),
        Text("─" * (left_column_width + chart_width), style="dim"),
    ]
    for item, bar in bars:
        chart_elements.append(_build_row(item, bar, left_column_width, chart_width))

    console.print(Padding(Group(*chart_elements), (0, 0, 1, 0)))
