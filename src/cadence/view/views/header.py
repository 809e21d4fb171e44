# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import print
from rich.padding import Padding

from cadence.time import datetime_to_display_local_datetime_str
from cadence.view.state import get_show_header


def header(
    user_id: str,
    sub_header: Optional[str] = None,
    as_of: Optional[pendulum.DateTime] = None,
) -> None:
    """Print the application header.

    Args:
        user_id: Owner of the read markers in effect
        sub_header: Name of the view
        as_of: Instant the view was computed for, shown next to the user
    """
    if not get_show_header():
        return

    print(Padding("[dark_orange]cadence[/dark_orange]", (1, 0, 0, 1)))
    if sub_header is not None:
        print(Padding(f"[sandy_brown]{sub_header}[/sandy_brown]", (0, 1)))

    subject = f"[plum1]{user_id}[/plum1]"
    if as_of is not None:
        subject += f" [dim]as of {datetime_to_display_local_datetime_str(as_of)}[/dim]"
    print(Padding(subject, (0, 1)))
