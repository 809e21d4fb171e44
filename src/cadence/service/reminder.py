# SPDX-License-Identifier: MIT

from cadence.model.deadline_item import DeadlineItem
from cadence.model.notification import Aggregation
from cadence.model.read_marker import ReadMarker


class ReminderAnnouncer:
    """
    Decides which due-soon items still need a reminder pop-up.

    Each item is announced once while it stays due soon. When it leaves the
    due-soon bucket (it became overdue, was finalized, or moved out of the
    window) it is forgotten, so re-entering the bucket announces it again.
    """

    def __init__(self) -> None:
        self._announced: set[ReadMarker] = set()

    def pending(self, aggregation: Aggregation) -> list[DeadlineItem]:
        current = {
            (bucketed["item"]["kind"], bucketed["item"]["id"]): bucketed["item"]
            for bucketed in aggregation["due_soon"]
        }
        current_keys = set(current)
        self._announced &= current_keys

        pending = [item for key, item in current.items() if key not in self._announced]
        self._announced |= current_keys
        return pending

    @property
    def announced(self) -> frozenset[ReadMarker]:
        return frozenset(self._announced)
