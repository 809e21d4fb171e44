# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from cadence.model.entity_id import EntityId

DeadlineKind = Literal["task_reminder", "sprint_deadline", "task_slot"]

# A deadline as handed over by the item source: parsed, absent, or the raw
# string that failed to parse.
RawDeadline = Optional[pendulum.DateTime | str]


class DeadlineItem(TypedDict):
    id: EntityId
    kind: DeadlineKind
    label: str
    deadline_at: RawDeadline
    is_finalized: bool  # completed / won / lost
    has_running_timer: bool
    parent_ref: Optional[str]  # project or context label


class DeadlineFilter(TypedDict, total=False):
    kinds: Optional[list[DeadlineKind]]
    parent_ref: Optional[str]
    include_finalized: bool
