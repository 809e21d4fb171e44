# SPDX-License-Identifier: MIT

import pendulum
from rich.console import Console
from rich.text import Text

from cadence.model.recurring_activity import RecurringActivity
from cadence.time import date_to_display_str
from cadence.view.views.header import header


def agenda_view(
    user_id: str,
    report_name: str,
    days: list[tuple[pendulum.Date, list[RecurringActivity]]],
    today: pendulum.Date,
    show_empty_days: bool = False,
) -> None:
    """
    Display recurring activity occurrences day by day.

    Args:
        user_id: The active user
        report_name: Sub-header text
        days: Each visible day with the activities firing on it
        today: Highlighted in the day headers
        show_empty_days: Print days without any occurrence
    """
    header(user_id, report_name)

    console = Console()
    printed = False
    for date, activities in days:
        if not activities and not show_empty_days:
            continue
        printed = True

        day_header = Text(date_to_display_str(date), style="bold")
        if date == today:
            day_header.stylize("reverse")
        console.print()
        console.print(day_header)

        for activity in activities:
            line = Text("  ")
            line.append(f"[{activity['category']}] ", style="plum1")
            line.append(activity["name"] or "")
            line.append(f"  {activity['frequency_rule'].value}", style="dim")
            console.print(line)

    if not printed:
        console.print("\n[dim]No activities in this range[/dim]\n")
    else:
        console.print()
