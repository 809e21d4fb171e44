# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from cadence.errors import ErrorChannel, MalformedInterval
from cadence.model.timeline import TimelineBar, TimelineItem
from cadence.time import days_between, to_date

# Narrowest bar drawn, so same-day items stay visible. Adjacent one-day items
# can overlap when a day is narrower than this.
MIN_WIDTH_PERCENT = 2.0


def intervals_overlap(
    first_start: pendulum.Date | pendulum.DateTime,
    first_end: pendulum.Date | pendulum.DateTime,
    second_start: pendulum.Date | pendulum.DateTime,
    second_end: pendulum.Date | pendulum.DateTime,
) -> bool:
    """Inclusive overlap of two day ranges."""
    return to_date(first_start) <= to_date(second_end) and to_date(
        second_start
    ) <= to_date(first_end)


def layout(
    window_start: pendulum.Date | pendulum.DateTime,
    window_end: pendulum.Date | pendulum.DateTime,
    item_start: pendulum.Date | pendulum.DateTime,
    item_end: pendulum.Date | pendulum.DateTime,
    errors: Optional[ErrorChannel] = None,
    item_id: Optional[str] = None,
) -> TimelineBar:
    """
    Project an item's day range onto a visible window as percentages.

    The bar is clipped to the window and never narrower than
    MIN_WIDTH_PERCENT. When the floor would push the bar past the right edge
    it is shifted left so that offset + width stays within 100.

    An item ending before it starts is laid out as a single point at its
    start and reported as a MalformedInterval; a window ending before it
    starts is treated as its first day.

    Args:
        window_start: First visible day
        window_end: Last visible day (inclusive)
        item_start: First day of the item
        item_end: Last day of the item (inclusive)
        errors: Receives MalformedInterval reports
        item_id: Used to label reports

    Returns:
        offset_percent, width_percent and whether the item overlaps the window
    """
    window_first = to_date(window_start)
    window_last = to_date(window_end)
    if window_last < window_first:
        if errors is not None:
            errors.report(
                MalformedInterval(
                    f"Window ends {window_last} before it starts {window_first}",
                    entity_kind="timeline_window",
                )
            )
        window_last = window_first

    item_first = to_date(item_start)
    item_last = to_date(item_end)
    end_offset_correction = 1
    if item_last < item_first:
        if errors is not None:
            errors.report(
                MalformedInterval(
                    f"Item ends {item_last} before it starts {item_first}",
                    entity_kind="timeline_item",
                    entity_id=item_id,
                )
            )
        item_last = item_first
        # zero width at the start day
        end_offset_correction = 0

    total_span = days_between(window_first, window_last) + 1
    start_offset_days = min(total_span, max(0, days_between(window_first, item_first)))
    end_offset_days = min(
        total_span, days_between(window_first, item_last) + end_offset_correction
    )
    end_offset_days = max(start_offset_days, end_offset_days)

    offset_percent = 100 * start_offset_days / total_span
    width_percent = max(
        MIN_WIDTH_PERCENT, 100 * (end_offset_days - start_offset_days) / total_span
    )
    if offset_percent + width_percent > 100:
        offset_percent = max(0.0, 100 - width_percent)

    return {
        "offset_percent": offset_percent,
        "width_percent": width_percent,
        "visible": intervals_overlap(window_first, window_last, item_first, item_last),
    }


def layout_items(
    window_start: pendulum.Date | pendulum.DateTime,
    window_end: pendulum.Date | pendulum.DateTime,
    items: list[TimelineItem],
    errors: Optional[ErrorChannel] = None,
    visible_only: bool = True,
) -> list[tuple[TimelineItem, TimelineBar]]:
    """Lay out several items against one window, sorted by start day."""
    bars = []
    for item in sorted(items, key=lambda timeline_item: timeline_item["start"]):
        bar = layout(
            window_start,
            window_end,
            item["start"],
            item["end"],
            errors=errors,
            item_id=item["id"],
        )
        if visible_only and not bar["visible"]:
            continue
        bars.append((item, bar))
    return bars
