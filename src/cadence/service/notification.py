# SPDX-License-Identifier: MIT

from typing import Optional, Protocol

import pendulum

from cadence.clock import Clock
from cadence.errors import ErrorChannel, ItemSourceFailure
from cadence.model.deadline_item import DeadlineFilter, DeadlineItem
from cadence.model.notification import NotificationPass
from cadence.service.deadline import aggregate
from cadence.service.read_state import ReadStateStore


class DeadlineItemSource(Protocol):
    def fetch_deadline_items(
        self, filter: Optional[DeadlineFilter] = None
    ) -> list[DeadlineItem]: ...


def compute_notifications(
    source: DeadlineItemSource,
    store: ReadStateStore,
    clock: Clock,
    due_soon_window: pendulum.Duration,
    preview_limit: Optional[int] = None,
    filter: Optional[DeadlineFilter] = None,
) -> NotificationPass:
    """
    Run one recomputation pass.

    The clock is read exactly once. If the source fails, no aggregation is
    produced and the failure is the only report; a partial item list is
    never aggregated.
    """
    errors = ErrorChannel()
    now = clock.now()

    try:
        items = source.fetch_deadline_items(filter)
    except ItemSourceFailure as e:
        errors.report(e)
        return {"aggregation": None, "items": [], "errors": errors.reports}

    aggregation = aggregate(
        items,
        store.markers,
        now,
        due_soon_window,
        preview_limit=preview_limit,
        errors=errors,
    )
    return {"aggregation": aggregation, "items": items, "errors": errors.reports}
