# SPDX-License-Identifier: MIT

import re
from typing import Optional, get_args

import pendulum
import typer

from cadence.clock import SYSTEM_CLOCK
from cadence.model.deadline_item import DeadlineKind
from cadence.time import date_from_str


def parse_date(date_param: Optional[str]) -> Optional[pendulum.Date]:
    """
    Parse a CLI date argument.

    Accepts YYYY-MM-DD, a signed day offset from today ("1", "-7"), and the
    shortcuts today/t, yesterday/y, tomorrow/o.
    """
    if date_param is None:
        return None

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date_param):
        try:
            return date_from_str(date_param)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date_param):
        return SYSTEM_CLOCK.today().add(days=int(date_param))

    if date_param == "today" or date_param == "t":
        return SYSTEM_CLOCK.today()
    if date_param == "yesterday" or date_param == "y":
        return SYSTEM_CLOCK.today().subtract(days=1)
    if date_param == "tomorrow" or date_param == "o":
        return SYSTEM_CLOCK.today().add(days=1)
    raise typer.BadParameter("Incorrect date format")


def parse_kind(kind_param: Optional[str]) -> Optional[DeadlineKind]:
    if kind_param is None:
        return None
    valid_kinds = get_args(DeadlineKind)
    if kind_param not in valid_kinds:
        raise typer.BadParameter(
            f"Invalid kind: {kind_param}. Valid options: {', '.join(valid_kinds)}"
        )
    return kind_param  # type: ignore[return-value]
