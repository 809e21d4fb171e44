# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from yaml import YAMLError, load

from cadence import configuration
from cadence.errors import (
    ErrorChannel,
    ErrorReport,
    InvalidRecurrenceRule,
    ItemSourceFailure,
)
from cadence.model.entity_id import generate_entity_id
from cadence.model.recurring_activity import RecurringActivity
from cadence.repository.loader import DataLoader
from cadence.service.recurrence import parse_frequency_rule
from cadence.time import date_from_str


class ActivityRepository:
    """
    Recurring activity definitions stored in activities.yaml.

    Records with an unknown frequency, an unreadable start date or no mapping
    shape are rejected while loading and kept as error reports instead of
    being passed on to the recurrence evaluator. A file that cannot be read
    at all leaves no activities and a single item_source_failure report.
    """

    def __init__(self) -> None:
        self._activities: Optional[list[RecurringActivity]] = None
        self._rejected: list[ErrorReport] = []

    @property
    def activities(self) -> list[RecurringActivity]:
        if self._activities is None:
            self.__load_data()
        if self._activities is None:
            raise ValueError()
        return self._activities

    def __load_data(self) -> None:
        self._activities = []
        self._rejected = []
        path = configuration.DATA_ACTIVITIES_PATH
        if not path.is_file():
            return

        errors = ErrorChannel()
        try:
            activities_data = load(path.read_text(), Loader=DataLoader)
        except (OSError, YAMLError, ValueError) as e:
            errors.report(
                ItemSourceFailure(f"Cannot read activities from {path}: {e}")
            )
            self._rejected = errors.reports
            return
        if activities_data is None:
            return
        if not isinstance(activities_data, dict) or not isinstance(
            activities_data.get("activities") or [], list
        ):
            errors.report(ItemSourceFailure(f"Unexpected layout in {path}"))
            self._rejected = errors.reports
            return

        for raw_activity in activities_data.get("activities") or []:
            try:
                self._activities.append(
                    self.__convert_activity_for_deserialization(raw_activity)
                )
            except InvalidRecurrenceRule as e:
                errors.report(e)
        self._rejected = errors.reports

    def __convert_activity_for_deserialization(
        self, activity: Any
    ) -> RecurringActivity:
        if not isinstance(activity, dict):
            raise InvalidRecurrenceRule(
                f"Activity record is not a mapping: {activity!r}",
                entity_kind="recurring_activity",
            )
        deserializable_activity = dict(activity)
        if deserializable_activity.get("id") is None:
            deserializable_activity["id"] = generate_entity_id()
        activity_id = str(deserializable_activity["id"])

        frequency = deserializable_activity.pop("frequency", None)
        try:
            deserializable_activity["frequency_rule"] = parse_frequency_rule(frequency)
        except InvalidRecurrenceRule as e:
            e.entity_kind = "recurring_activity"
            e.entity_id = activity_id
            raise

        start_date = deserializable_activity.get("start_date")
        try:
            deserializable_activity["start_date"] = date_from_str(str(start_date))
        except ValueError as e:
            raise InvalidRecurrenceRule(
                f"Cannot parse start_date {start_date!r}",
                entity_kind="recurring_activity",
                entity_id=activity_id,
            ) from e

        deserializable_activity["id"] = activity_id
        deserializable_activity.setdefault("category", "")
        deserializable_activity.setdefault("name", "")
        deserializable_activity.setdefault("description", None)
        return cast(RecurringActivity, deserializable_activity)

    def reset(self) -> None:
        self._activities = None
        self._rejected = []

    def get_all_activities(self) -> list[RecurringActivity]:
        return deepcopy(self.activities)

    def get_rejected(self) -> list[ErrorReport]:
        # Loading populates the rejected list
        self.activities
        return list(self._rejected)

    def get_categories(self) -> list[str]:
        return sorted({activity["category"] for activity in self.activities})


ACTIVITY_REPO = ActivityRepository()
