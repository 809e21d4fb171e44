# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from cadence.errors import ErrorReport
from cadence.model.deadline_item import DeadlineItem, DeadlineKind

Classification = Literal["due_soon", "overdue"]


class Bucketed(TypedDict):
    item: DeadlineItem
    deadline_at: pendulum.DateTime
    classification: Classification
    is_read: bool


class BucketPreview(TypedDict):
    total: int  # true size of the bucket
    shown: list[Bucketed]  # capped for display


class KindBuckets(TypedDict):
    due_soon: BucketPreview
    overdue: BucketPreview


class Aggregation(TypedDict):
    now: pendulum.DateTime
    due_soon: list[Bucketed]
    overdue: list[Bucketed]
    by_kind: dict[DeadlineKind, KindBuckets]
    unclassifiable: list[DeadlineItem]
    total_count: int
    unread_count: int
    errors: list[ErrorReport]


class Countdown(TypedDict):
    days: int
    hours: int
    minutes: int
    seconds: int
    is_past: bool
    formatted: str


class NotificationPass(TypedDict):
    aggregation: Optional[Aggregation]
    items: list[DeadlineItem]
    errors: list[ErrorReport]
