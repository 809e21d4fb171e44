# SPDX-License-Identifier: MIT

import logging
import threading
from typing import Optional, Protocol

from cadence.errors import ErrorReport, MarkerPersistenceFailure
from cadence.model.deadline_item import DeadlineKind
from cadence.model.entity_id import EntityId
from cadence.model.notification import Aggregation
from cadence.model.read_marker import ReadMarker

logger = logging.getLogger(__name__)


class MarkerPersistence(Protocol):
    def load_markers(self, user_id: str) -> set[ReadMarker]: ...

    def save_marker(self, user_id: str, kind: DeadlineKind, id: EntityId) -> None: ...

    def delete_marker(
        self, user_id: str, kind: DeadlineKind, id: EntityId
    ) -> None: ...


class ReadStateStore:
    """
    In-memory read markers for one user, optionally backed by persistence.

    Updates are optimistic: the marker set changes first and is reverted if
    the persistence write raises MarkerPersistenceFailure, so a failed write
    never leaves an item looking read.
    """

    def __init__(
        self, user_id: str, persistence: Optional[MarkerPersistence] = None
    ) -> None:
        self.user_id = user_id
        self._persistence = persistence
        self._markers: set[ReadMarker] = set()
        self._lock = threading.RLock()

    def load(self) -> Optional[ErrorReport]:
        """Replace the in-memory markers with the persisted ones."""
        if self._persistence is None:
            return None
        try:
            markers = self._persistence.load_markers(self.user_id)
        except MarkerPersistenceFailure as e:
            logger.warning("Could not load read markers: %s", e.message)
            return e.to_report()
        with self._lock:
            self._markers = set(markers)
        return None

    @property
    def markers(self) -> frozenset[ReadMarker]:
        with self._lock:
            return frozenset(self._markers)

    def is_read(self, kind: DeadlineKind, id: EntityId) -> bool:
        with self._lock:
            return (kind, id) in self._markers

    def mark_read(self, kind: DeadlineKind, id: EntityId) -> Optional[ErrorReport]:
        """
        Mark one item as read.

        Marking an already read item is a no-op. Returns an error report if
        the marker could not be persisted; the marker is not kept in that case.
        """
        with self._lock:
            return self.__mark_read_locked((kind, id))

    def mark_unread(self, kind: DeadlineKind, id: EntityId) -> Optional[ErrorReport]:
        """Remove a marker. Unmarking an unread item is a no-op."""
        key: ReadMarker = (kind, id)
        with self._lock:
            if key not in self._markers:
                return None
            self._markers.discard(key)
            if self._persistence is None:
                return None
            try:
                self._persistence.delete_marker(self.user_id, kind, id)
            except MarkerPersistenceFailure as e:
                self._markers.add(key)
                logger.warning("Rolled back unread marker %s: %s", key, e.message)
                return e.to_report()
        return None

    def mark_all_read(
        self, aggregation: Aggregation, kind: Optional[DeadlineKind] = None
    ) -> list[ErrorReport]:
        """
        Mark every unread item of an aggregation snapshot as read.

        Only items present in the snapshot are marked; anything that became
        due or overdue after the snapshot was taken stays unread.

        Args:
            aggregation: The snapshot the caller rendered
            kind: Limit marking to one kind

        Returns:
            One report per marker that failed to persist
        """
        reports: list[ErrorReport] = []
        with self._lock:
            for bucketed in aggregation["overdue"] + aggregation["due_soon"]:
                item = bucketed["item"]
                if kind is not None and item["kind"] != kind:
                    continue
                report = self.__mark_read_locked((item["kind"], item["id"]))
                if report is not None:
                    reports.append(report)
        return reports

    def __mark_read_locked(self, key: ReadMarker) -> Optional[ErrorReport]:
        if key in self._markers:
            return None
        self._markers.add(key)
        if self._persistence is None:
            return None
        try:
            self._persistence.save_marker(self.user_id, key[0], key[1])
        except MarkerPersistenceFailure as e:
            self._markers.discard(key)
            logger.warning("Rolled back read marker %s: %s", key, e.message)
            return e.to_report()
        return None
