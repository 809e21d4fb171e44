# SPDX-License-Identifier: MIT

from typing import cast

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    """
    Parse an ISO-8601 string into a pendulum.DateTime.

    Naive strings are read as UTC. Date-only strings become midnight UTC.
    Raises ValueError (or a pendulum parser error, which subclasses it) on
    unparseable input.
    """
    parsed = pendulum.parse(datetime, tz="UTC")
    if isinstance(parsed, pendulum.DateTime):
        return parsed
    if isinstance(parsed, pendulum.Date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz="UTC")
    raise ValueError(f"Not a date or datetime: {datetime!r}")


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string into a pendulum.Date."""
    parsed = pendulum.parse(date_str, exact=True)
    if isinstance(parsed, pendulum.DateTime):
        return cast(pendulum.Date, parsed.date())
    if isinstance(parsed, pendulum.Date):
        return parsed
    raise ValueError(f"Not a date: {date_str!r}")


def to_date(value: pendulum.Date | pendulum.DateTime) -> pendulum.Date:
    """
    Reduce a value to its calendar date.

    A DateTime keeps its own calendar day (no timezone conversion), so
    time-of-day is simply dropped.
    """
    return pendulum.date(value.year, value.month, value.day)


def days_between(
    start: pendulum.Date | pendulum.DateTime, end: pendulum.Date | pendulum.DateTime
) -> int:
    """Signed number of calendar days from start to end."""
    return to_date(end).toordinal() - to_date(start).toordinal()


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("MMM-DD ddd HH:mm")


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")
