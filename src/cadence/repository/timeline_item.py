# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from yaml import YAMLError, load

from cadence import configuration
from cadence.errors import (
    ErrorChannel,
    ErrorReport,
    ItemSourceFailure,
    MalformedInterval,
)
from cadence.model.entity_id import generate_entity_id
from cadence.model.timeline import TimelineItem
from cadence.repository.loader import DataLoader
from cadence.time import date_from_str


class TimelineItemRepository:
    """
    Timeline items stored in timeline.yaml.

    Records without a readable start or end are rejected as malformed
    intervals and kept as error reports, like rejected activities.
    """

    def __init__(self) -> None:
        self._items: Optional[list[TimelineItem]] = None
        self._rejected: list[ErrorReport] = []

    @property
    def items(self) -> list[TimelineItem]:
        if self._items is None:
            self.__load_data()
        if self._items is None:
            raise ValueError()
        return self._items

    def __load_data(self) -> None:
        self._items = []
        self._rejected = []
        path = configuration.DATA_TIMELINE_PATH
        if not path.is_file():
            return

        errors = ErrorChannel()
        try:
            timeline_data = load(path.read_text(), Loader=DataLoader)
        except (OSError, YAMLError, ValueError) as e:
            errors.report(
                ItemSourceFailure(f"Cannot read timeline items from {path}: {e}")
            )
            self._rejected = errors.reports
            return
        if timeline_data is None:
            return
        if not isinstance(timeline_data, dict) or not isinstance(
            timeline_data.get("items") or [], list
        ):
            errors.report(ItemSourceFailure(f"Unexpected layout in {path}"))
            self._rejected = errors.reports
            return

        for raw_item in timeline_data.get("items") or []:
            try:
                self._items.append(self.__convert_item_for_deserialization(raw_item))
            except MalformedInterval as e:
                errors.report(e)
        self._rejected = errors.reports

    def __convert_item_for_deserialization(self, item: Any) -> TimelineItem:
        if not isinstance(item, dict):
            raise MalformedInterval(
                f"Timeline record is not a mapping: {item!r}",
                entity_kind="timeline_item",
            )
        deserializable_item = dict(item)
        if deserializable_item.get("id") is None:
            deserializable_item["id"] = generate_entity_id()
        item_id = str(deserializable_item["id"])
        deserializable_item["id"] = item_id
        deserializable_item["label"] = str(deserializable_item.get("label") or "")

        start = deserializable_item.get("start")
        end = deserializable_item.get("end")
        try:
            deserializable_item["start"] = date_from_str(str(start))
            # Items without an end are single-day items
            deserializable_item["end"] = (
                deserializable_item["start"] if end is None else date_from_str(str(end))
            )
        except ValueError as e:
            raise MalformedInterval(
                f"Cannot parse interval start={start!r} end={end!r}",
                entity_kind="timeline_item",
                entity_id=item_id,
            ) from e

        deserializable_item.setdefault("parent_ref", None)
        return cast(TimelineItem, deserializable_item)

    def reset(self) -> None:
        self._items = None
        self._rejected = []

    def get_all_items(self) -> list[TimelineItem]:
        return deepcopy(self.items)

    def get_rejected(self) -> list[ErrorReport]:
        # Loading populates the rejected list
        self.items
        return list(self._rejected)


TIMELINE_ITEM_REPO = TimelineItemRepository()
