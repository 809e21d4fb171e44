# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import pendulum
import typer

from cadence.clock import SYSTEM_CLOCK
from cadence.errors import ErrorChannel
from cadence.model.recurring_activity import RecurringActivity
from cadence.repository.activity import ACTIVITY_REPO
from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.repository.timeline_item import TIMELINE_ITEM_REPO
from cadence.service.recurrence import activities_for_date, month_window, week_window
from cadence.service.timeline import layout_items
from cadence.terminal.parse import parse_date
from cadence.view.views.agenda import agenda_view
from cadence.view.views.gantt import gantt_view
from cadence.view.views.notification import errors_view

logger = logging.getLogger(__name__)


def agenda(
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="YYYY-MM-DD, day offset, today/t, tomorrow/o"),
    ] = None,
    week: Annotated[
        bool,
        typer.Option("--week", "-w", help="Show the week instead of the month"),
    ] = False,
    categories: Annotated[
        Optional[list[str]],
        typer.Option("--category", "-c", help="accepts multiple category options"),
    ] = None,
    show_empty_days: Annotated[
        bool, typer.Option("--empty", "-e", help="Show days without activities")
    ] = False,
) -> None:
    """Show recurring activity occurrences for a month or week."""
    config = CONFIGURATION_REPO.get_config()
    today = SYSTEM_CLOCK.today()
    target = parse_date(date) or today
    window_start, window_end = week_window(target) if week else month_window(target)

    errors = ErrorChannel()
    errors.extend(ACTIVITY_REPO.get_rejected())
    if errors.has_errors("item_source_failure"):
        errors_view(errors.reports)
        raise typer.Exit(1)
    activities = ACTIVITY_REPO.get_all_activities()
    known_categories = ACTIVITY_REPO.get_categories()
    for category in categories or []:
        if category not in known_categories:
            logger.warning("No activities in category %r", category)

    days: list[tuple[pendulum.Date, list[RecurringActivity]]] = []
    current = window_start
    while current <= window_end:
        days.append(
            (current, activities_for_date(activities, current, categories, errors))
        )
        current = current.add(days=1)

    report_name = "week" if week else "month"
    agenda_view(
        config["user_id"],
        f"agenda ({report_name} of {target.to_date_string()})",
        days,
        today,
        show_empty_days,
    )
    errors_view(errors.reports)


def gantt(
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="YYYY-MM-DD, day offset, today/t, tomorrow/o"),
    ] = None,
    all_items: Annotated[
        bool, typer.Option("--all", "-a", help="Include items outside the window")
    ] = False,
) -> None:
    """Show timeline items as bars across the month containing a date."""
    config = CONFIGURATION_REPO.get_config()
    target = parse_date(date) or SYSTEM_CLOCK.today()
    window_start, window_end = month_window(target)

    errors = ErrorChannel()
    errors.extend(TIMELINE_ITEM_REPO.get_rejected())
    if errors.has_errors("item_source_failure"):
        errors_view(errors.reports)
        raise typer.Exit(1)
    bars = layout_items(
        window_start,
        window_end,
        TIMELINE_ITEM_REPO.get_all_items(),
        errors=errors,
        visible_only=not all_items,
    )
    gantt_view(
        config["user_id"],
        f"gantt ({window_start.format('MMMM YYYY')})",
        window_start,
        window_end,
        bars,
    )
    errors_view(errors.reports)
