# SPDX-License-Identifier: MIT

"""
Deadline classification and aggregation.

Merges deadline-bearing items of every kind (task reminders, sprint
deadlines, scheduled task slots) into due-soon and overdue buckets, applies
read state, and orders unified feeds.
"""

from typing import Collection, Optional, get_args

import pendulum

from cadence.errors import ErrorChannel, MalformedDeadline
from cadence.model.deadline_item import DeadlineItem, DeadlineKind, RawDeadline
from cadence.model.notification import (
    Aggregation,
    Bucketed,
    BucketPreview,
    Classification,
    Countdown,
    KindBuckets,
)
from cadence.model.read_marker import ReadMarker
from cadence.time import datetime_from_str

DEADLINE_KINDS: tuple[DeadlineKind, ...] = get_args(DeadlineKind)

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60


def resolve_deadline(item: DeadlineItem) -> Optional[pendulum.DateTime]:
    """
    Return the item's deadline as a DateTime.

    Returns None when the item has no deadline.

    Raises:
        MalformedDeadline: if the deadline is present but cannot be parsed
    """
    deadline: RawDeadline = item["deadline_at"]
    if deadline is None:
        return None
    if isinstance(deadline, pendulum.DateTime):
        return deadline
    if isinstance(deadline, str):
        try:
            return datetime_from_str(deadline)
        except ValueError as e:
            raise MalformedDeadline(
                f"Cannot parse deadline {deadline!r}: {e}",
                entity_kind=item["kind"],
                entity_id=item["id"],
            ) from e
    raise MalformedDeadline(
        f"Unsupported deadline value {deadline!r}",
        entity_kind=item["kind"],
        entity_id=item["id"],
    )


def _safe_deadline(item: DeadlineItem) -> Optional[pendulum.DateTime]:
    try:
        return resolve_deadline(item)
    except MalformedDeadline:
        return None


def classify_deadline(
    deadline_at: pendulum.DateTime,
    is_finalized: bool,
    now: pendulum.DateTime,
    due_soon_window: pendulum.Duration,
) -> Optional[Classification]:
    if is_finalized:
        return None
    if deadline_at < now:
        return "overdue"
    if deadline_at < now + due_soon_window:
        return "due_soon"
    return None


def classify(
    item: DeadlineItem,
    now: pendulum.DateTime,
    due_soon_window: pendulum.Duration,
) -> Optional[Classification]:
    """
    Classify one item as "overdue", "due_soon", or neither (None).

    Finalized items, items without a deadline and items whose deadline
    does not parse are never classified.
    """
    deadline_at = _safe_deadline(item)
    if deadline_at is None:
        return None
    return classify_deadline(deadline_at, item["is_finalized"], now, due_soon_window)


def is_overdue(item: DeadlineItem, now: pendulum.DateTime) -> bool:
    deadline_at = _safe_deadline(item)
    return deadline_at is not None and not item["is_finalized"] and deadline_at < now


def _feed_key(item: DeadlineItem, now: pendulum.DateTime) -> tuple[int, int, int, float]:
    deadline_at = _safe_deadline(item)
    return (
        0 if item["has_running_timer"] else 1,
        0 if is_overdue(item, now) else 1,
        0 if deadline_at is not None else 1,
        deadline_at.timestamp() if deadline_at is not None else 0.0,
    )


def sort_feed(items: list[DeadlineItem], now: pendulum.DateTime) -> list[DeadlineItem]:
    """
    Order a unified feed across kinds.

    Running timers first, then overdue before not overdue, then ascending
    deadline, with items lacking a usable deadline last. Python's sort is
    stable, so items equal on every key keep their original order.
    """
    return sorted(items, key=lambda item: _feed_key(item, now))


def _sort_bucket(bucket: list[Bucketed], now: pendulum.DateTime) -> list[Bucketed]:
    return sorted(bucket, key=lambda bucketed: _feed_key(bucketed["item"], now))


def _preview(bucket: list[Bucketed], preview_limit: Optional[int]) -> BucketPreview:
    shown = bucket if preview_limit is None else bucket[:preview_limit]
    return {"total": len(bucket), "shown": shown}


def aggregate(
    items: list[DeadlineItem],
    read_markers: Collection[ReadMarker],
    now: pendulum.DateTime,
    due_soon_window: pendulum.Duration,
    preview_limit: Optional[int] = None,
    errors: Optional[ErrorChannel] = None,
) -> Aggregation:
    """
    Classify items into due-soon and overdue buckets.

    Args:
        items: Normalized items from every source; duplicates by (kind, id)
            keep the first occurrence
        read_markers: Acknowledged (kind, id) pairs
        now: The single instant used for the whole pass
        due_soon_window: Lookahead for the due-soon bucket
        preview_limit: Cap on the "shown" list of each per-kind bucket; the
            "total" is never capped
        errors: Receives a MalformedDeadline report per unparseable item

    Returns:
        The buckets, sorted with sort_feed order, plus per-kind previews and
        the items that could not be classified
    """
    channel = errors if errors is not None else ErrorChannel()
    reports_before = len(channel)

    due_soon: list[Bucketed] = []
    overdue: list[Bucketed] = []
    unclassifiable: list[DeadlineItem] = []
    seen: set[ReadMarker] = set()

    for item in items:
        key: ReadMarker = (item["kind"], item["id"])
        if key in seen:
            continue
        seen.add(key)

        try:
            deadline_at = resolve_deadline(item)
        except MalformedDeadline as e:
            channel.report(e)
            unclassifiable.append(item)
            continue
        if deadline_at is None:
            continue

        classification = classify_deadline(
            deadline_at, item["is_finalized"], now, due_soon_window
        )
        if classification is None:
            continue

        bucketed: Bucketed = {
            "item": item,
            "deadline_at": deadline_at,
            "classification": classification,
            "is_read": key in read_markers,
        }
        if classification == "overdue":
            overdue.append(bucketed)
        else:
            due_soon.append(bucketed)

    due_soon = _sort_bucket(due_soon, now)
    overdue = _sort_bucket(overdue, now)

    by_kind: dict[DeadlineKind, KindBuckets] = {}
    for kind in DEADLINE_KINDS:
        by_kind[kind] = {
            "due_soon": _preview(
                [b for b in due_soon if b["item"]["kind"] == kind], preview_limit
            ),
            "overdue": _preview(
                [b for b in overdue if b["item"]["kind"] == kind], preview_limit
            ),
        }

    return {
        "now": now,
        "due_soon": due_soon,
        "overdue": overdue,
        "by_kind": by_kind,
        "unclassifiable": unclassifiable,
        "total_count": len(due_soon) + len(overdue),
        "unread_count": len([b for b in due_soon + overdue if not b["is_read"]]),
        "errors": channel.reports[reports_before:],
    }


def countdown(deadline_at: pendulum.DateTime, now: pendulum.DateTime) -> Countdown:
    """
    Decompose |deadline_at - now| into days, hours, minutes and seconds.

    The sign is carried by is_past only; the numbers are always positive.
    """
    diff_seconds = deadline_at.timestamp() - now.timestamp()
    is_past = diff_seconds < 0
    remaining = int(abs(diff_seconds))

    days, remaining = divmod(remaining, SECONDS_PER_DAY)
    hours, remaining = divmod(remaining, SECONDS_PER_HOUR)
    minutes, seconds = divmod(remaining, SECONDS_PER_MINUTE)

    return {
        "days": days,
        "hours": hours,
        "minutes": minutes,
        "seconds": seconds,
        "is_past": is_past,
        "formatted": f"{days}D {hours}H {minutes}M {seconds}S",
    }


def format_countdown(
    item: DeadlineItem, now: pendulum.DateTime
) -> Optional[tuple[str, bool]]:
    """Return (formatted countdown, is_past) for an item, or None without a usable deadline."""
    deadline_at = _safe_deadline(item)
    if deadline_at is None:
        return None
    item_countdown = countdown(deadline_at, now)
    return item_countdown["formatted"], item_countdown["is_past"]
