# SPDX-License-Identifier: MIT

import logging
from typing import Literal, Optional, TypedDict

logger = logging.getLogger(__name__)

ErrorKind = Literal[
    "invalid_recurrence_rule",
    "malformed_deadline",
    "marker_persistence_failure",
    "malformed_interval",
    "item_source_failure",
]


class ErrorReport(TypedDict):
    error_kind: ErrorKind
    message: str
    entity_kind: Optional[str]
    entity_id: Optional[str]


class CadenceError(Exception):
    """Base class for failures the computation core reports to its caller."""

    error_kind: ErrorKind

    def __init__(
        self,
        message: str,
        entity_kind: Optional[str] = None,
        entity_id: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.entity_kind = entity_kind
        self.entity_id = entity_id

    def to_report(self) -> ErrorReport:
        return {
            "error_kind": self.error_kind,
            "message": self.message,
            "entity_kind": self.entity_kind,
            "entity_id": self.entity_id,
        }


class InvalidRecurrenceRule(CadenceError):
    """Raised when a frequency tag is not one of the known rules."""

    error_kind = "invalid_recurrence_rule"


class MalformedDeadline(CadenceError):
    """Raised when a deadline timestamp cannot be parsed."""

    error_kind = "malformed_deadline"


class MarkerPersistenceFailure(CadenceError):
    """Raised when a read marker cannot be written to or removed from storage."""

    error_kind = "marker_persistence_failure"


class MalformedInterval(CadenceError):
    """Raised when an interval ends before it starts or cannot be read."""

    error_kind = "malformed_interval"


class ItemSourceFailure(CadenceError):
    """Raised when items cannot be fetched from their source."""

    error_kind = "item_source_failure"


class ErrorChannel:
    """Collects error reports for one computation pass."""

    def __init__(self) -> None:
        self._reports: list[ErrorReport] = []

    def report(self, error: CadenceError) -> ErrorReport:
        report = error.to_report()
        logger.warning(
            "%s: %s (%s %s)",
            report["error_kind"],
            report["message"],
            report["entity_kind"],
            report["entity_id"],
        )
        self._reports.append(report)
        return report

    def extend(self, reports: list[ErrorReport]) -> None:
        self._reports.extend(reports)

    @property
    def reports(self) -> list[ErrorReport]:
        return list(self._reports)

    def has_errors(self, error_kind: Optional[ErrorKind] = None) -> bool:
        if error_kind is None:
            return len(self._reports) > 0
        return any(report["error_kind"] == error_kind for report in self._reports)

    def __len__(self) -> int:
        return len(self._reports)
