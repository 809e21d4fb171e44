# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from cadence.model.entity_id import EntityId


class TimelineBar(TypedDict):
    offset_percent: float
    width_percent: float
    visible: bool


class TimelineItem(TypedDict):
    id: EntityId
    label: str
    start: pendulum.Date
    end: pendulum.Date
    parent_ref: Optional[str]
