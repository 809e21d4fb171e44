# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from cadence.clock import Clock
from cadence.errors import ErrorChannel, InvalidRecurrenceRule
from cadence.model.frequency_rule import FREQUENCY_ALIASES, FrequencyRule
from cadence.model.recurring_activity import RecurringActivity
from cadence.time import days_between, to_date

# date.weekday(): Monday=0 ... Sunday=6
WEEKDAYS = {0, 1, 2, 3, 4}
WEEKEND_DAYS = {5, 6}


def parse_frequency_rule(raw: object) -> FrequencyRule:
    """
    Map a stored frequency tag to a FrequencyRule.

    Only exact tags (case-insensitive, surrounding whitespace ignored) and the
    entries of FREQUENCY_ALIASES are accepted. "weekly weekend" is rejected
    rather than routed to whichever keyword happens to be checked first.

    Raises:
        InvalidRecurrenceRule: if the tag is not recognized
    """
    if isinstance(raw, FrequencyRule):
        return raw
    if not isinstance(raw, str):
        raise InvalidRecurrenceRule(f"Frequency must be a string, got {raw!r}")

    normalized = raw.strip().lower()
    for rule in FrequencyRule:
        if normalized == rule.value:
            return rule
    if normalized in FREQUENCY_ALIASES:
        return FREQUENCY_ALIASES[normalized]

    valid = ", ".join(rule.value for rule in FrequencyRule)
    raise InvalidRecurrenceRule(f"Unknown frequency {raw!r}. Valid options: {valid}")


def occurs_on(
    activity: RecurringActivity,
    target_date: pendulum.Date | pendulum.DateTime,
    errors: Optional[ErrorChannel] = None,
) -> bool:
    """
    Decide whether a recurring activity fires on a calendar date.

    Both dates are compared at day granularity; time-of-day is dropped.

    Args:
        activity: The activity definition
        target_date: The date to test
        errors: Receives an InvalidRecurrenceRule report if the activity
            carries a rule this function does not know

    Returns:
        True if target_date is an occurrence of the activity
    """
    start = to_date(activity["start_date"])
    target = to_date(target_date)

    if target < start:
        return False

    match activity["frequency_rule"]:
        case FrequencyRule.DAILY:
            return True
        case FrequencyRule.WEEKLY:
            return target.weekday() == start.weekday()
        case FrequencyRule.BIWEEKLY:
            return (
                target.weekday() == start.weekday()
                and (days_between(start, target) // 7) % 2 == 0
            )
        case FrequencyRule.MONTHLY:
            # Jan 31 has no occurrence in February; no clamping.
            return target.day == start.day
        case FrequencyRule.WEEKDAY_ONLY:
            return target.weekday() in WEEKDAYS
        case FrequencyRule.WEEKEND_ONLY:
            return target.weekday() in WEEKEND_DAYS
        case _:
            if errors is not None:
                errors.report(
                    InvalidRecurrenceRule(
                        f"Unknown frequency {activity['frequency_rule']!r}",
                        entity_kind="recurring_activity",
                        entity_id=activity["id"],
                    )
                )
            return False


def occurs_today(
    activity: RecurringActivity,
    clock: Clock,
    errors: Optional[ErrorChannel] = None,
) -> bool:
    return occurs_on(activity, clock.today(), errors)


def occurrences_between(
    activity: RecurringActivity,
    start: pendulum.Date | pendulum.DateTime,
    end: pendulum.Date | pendulum.DateTime,
    errors: Optional[ErrorChannel] = None,
) -> list[pendulum.Date]:
    """List the occurrence dates of an activity in the inclusive range [start, end]."""
    if not isinstance(activity["frequency_rule"], FrequencyRule):
        # Report once for the range rather than once per day
        occurs_on(activity, activity["start_date"], errors)
        return []

    occurrences: list[pendulum.Date] = []
    current = to_date(start)
    last = to_date(end)
    while current <= last:
        if occurs_on(activity, current, errors):
            occurrences.append(current)
        current = current.add(days=1)
    return occurrences


def activities_for_date(
    activities: list[RecurringActivity],
    date: pendulum.Date | pendulum.DateTime,
    categories: Optional[list[str]] = None,
    errors: Optional[ErrorChannel] = None,
) -> list[RecurringActivity]:
    """
    Return the activities that fire on a date.

    When categories is given and not empty, only activities in one of those
    categories are considered.
    """
    return [
        activity
        for activity in activities
        if (not categories or activity["category"] in categories)
        and occurs_on(activity, date, errors)
    ]


def month_window(
    date: pendulum.Date | pendulum.DateTime,
) -> tuple[pendulum.Date, pendulum.Date]:
    """First and last day of the month containing date."""
    day = to_date(date)
    return day.start_of("month"), day.end_of("month")


def week_window(
    date: pendulum.Date | pendulum.DateTime,
) -> tuple[pendulum.Date, pendulum.Date]:
    """Monday and Sunday of the week containing date."""
    day = to_date(date)
    return day.start_of("week"), day.end_of("week")
