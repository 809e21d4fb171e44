# SPDX-License-Identifier: MIT

from typing import Any, Optional, cast, get_args

from yaml import YAMLError, load

from cadence import configuration
from cadence.errors import ItemSourceFailure
from cadence.model.deadline_item import (
    DeadlineFilter,
    DeadlineItem,
    DeadlineKind,
    RawDeadline,
)
from cadence.repository.loader import DataLoader
from cadence.time import datetime_from_str

DEADLINE_KINDS = get_args(DeadlineKind)


class DeadlineItemRepository:
    """
    Deadline-bearing items stored in deadlines.yaml.

    The file is re-read on every fetch so each tick sees current data.
    Timestamps are loaded as text and deadlines that do not parse are passed
    through as their raw string; the aggregator reports them.
    """

    def fetch_deadline_items(
        self, filter: Optional[DeadlineFilter] = None
    ) -> list[DeadlineItem]:
        """
        Raises:
            ItemSourceFailure: if the file cannot be read or a record is
                structurally invalid
        """
        items = [
            self.__convert_item_for_deserialization(raw_item)
            for raw_item in self.__load_raw_items()
        ]
        if filter is None:
            return items
        return [item for item in items if self.__matches(item, filter)]

    def __load_raw_items(self) -> list[dict[str, Any]]:
        path = configuration.DATA_DEADLINES_PATH
        try:
            deadlines_data = load(path.read_text(), Loader=DataLoader)
        except (OSError, YAMLError, ValueError) as e:
            raise ItemSourceFailure(f"Cannot read deadlines from {path}: {e}") from e
        if deadlines_data is None:
            return []
        if not isinstance(deadlines_data, dict) or not isinstance(
            deadlines_data.get("deadlines") or [], list
        ):
            raise ItemSourceFailure(f"Unexpected layout in {path}")
        return cast(list[dict[str, Any]], deadlines_data.get("deadlines") or [])

    def __convert_item_for_deserialization(self, item: Any) -> DeadlineItem:
        if not isinstance(item, dict):
            raise ItemSourceFailure(f"Deadline record is not a mapping: {item!r}")
        if item.get("id") is None:
            raise ItemSourceFailure(f"Deadline record without id: {item!r}")
        kind = item.get("kind")
        if kind not in DEADLINE_KINDS:
            raise ItemSourceFailure(
                f"Unknown deadline kind {kind!r}. Valid options: {', '.join(DEADLINE_KINDS)}",
                entity_id=str(item["id"]),
            )

        return {
            "id": str(item["id"]),
            "kind": kind,
            "label": str(item.get("label") or ""),
            "deadline_at": self.__convert_deadline(item.get("deadline_at")),
            "is_finalized": bool(item.get("is_finalized", False)),
            "has_running_timer": bool(item.get("has_running_timer", False)),
            "parent_ref": item.get("parent_ref"),
        }

    def __convert_deadline(self, value: Any) -> RawDeadline:
        if value is None:
            return None
        try:
            return datetime_from_str(str(value))
        except ValueError:
            return str(value)

    def __matches(self, item: DeadlineItem, filter: DeadlineFilter) -> bool:
        kinds = filter.get("kinds")
        if kinds and item["kind"] not in kinds:
            return False
        parent_ref = filter.get("parent_ref")
        if parent_ref is not None and item["parent_ref"] != parent_ref:
            return False
        if not filter.get("include_finalized", True) and item["is_finalized"]:
            return False
        return True


DEADLINE_ITEM_REPO = DeadlineItemRepository()
