# SPDX-License-Identifier: MIT

from typing import Any, Optional

import pendulum
import pytest
from yaml import dump

from cadence import configuration
from cadence.model.deadline_item import DeadlineItem, DeadlineKind
from cadence.model.frequency_rule import FrequencyRule
from cadence.model.recurring_activity import RecurringActivity
from cadence.model.timeline import TimelineItem
from cadence.repository.activity import ACTIVITY_REPO
from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.repository.read_marker import READ_MARKER_REPO
from cadence.repository.timeline_item import TIMELINE_ITEM_REPO
from cadence.view import state as view_state


def _reset_repositories() -> None:
    CONFIGURATION_REPO.reset()
    ACTIVITY_REPO.reset()
    TIMELINE_ITEM_REPO.reset()
    READ_MARKER_REPO.reset()


@pytest.fixture(autouse=True)
def data_path(tmp_path, monkeypatch):
    """Point every configuration and data file at a temporary directory."""
    config_path = tmp_path / "config"
    config_path.mkdir()
    data_path = tmp_path / "data"
    data_path.mkdir()

    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_path)
    monkeypatch.setattr(
        configuration, "DATA_ACTIVITIES_PATH", data_path / "activities.yaml"
    )
    monkeypatch.setattr(
        configuration, "DATA_DEADLINES_PATH", data_path / "deadlines.yaml"
    )
    monkeypatch.setattr(configuration, "DATA_TIMELINE_PATH", data_path / "timeline.yaml")
    monkeypatch.setattr(
        configuration, "DATA_READ_MARKERS_PATH", data_path / "read_markers.yaml"
    )

    _reset_repositories()
    view_state.set_show_header(True)
    yield data_path
    _reset_repositories()


@pytest.fixture
def write_data(data_path):
    """Write a YAML data file under the temporary data directory."""

    def _write(file_name: str, content: Any) -> None:
        (data_path / file_name).write_text(dump(content))

    return _write


@pytest.fixture
def now() -> pendulum.DateTime:
    return pendulum.datetime(2024, 10, 15, 10, 0, tz="UTC")


@pytest.fixture
def make_item():
    def _make_item(
        id: str,
        kind: DeadlineKind = "task_reminder",
        deadline_at: Optional[pendulum.DateTime | str] = None,
        is_finalized: bool = False,
        has_running_timer: bool = False,
        label: Optional[str] = None,
        parent_ref: Optional[str] = None,
    ) -> DeadlineItem:
        return {
            "id": id,
            "kind": kind,
            "label": label if label is not None else f"item {id}",
            "deadline_at": deadline_at,
            "is_finalized": is_finalized,
            "has_running_timer": has_running_timer,
            "parent_ref": parent_ref,
        }

    return _make_item


@pytest.fixture
def make_activity():
    def _make_activity(
        frequency_rule: FrequencyRule | str,
        start_date: pendulum.Date,
        id: str = "activity",
        category: str = "health",
        name: str = "Run",
    ) -> RecurringActivity:
        return {
            "id": id,
            "category": category,
            "name": name,
            "description": None,
            "frequency_rule": frequency_rule,  # type: ignore[typeddict-item]
            "start_date": start_date,
        }

    return _make_activity


@pytest.fixture
def make_timeline_item():
    def _make_timeline_item(
        id: str,
        start: pendulum.Date,
        end: pendulum.Date,
        label: Optional[str] = None,
    ) -> TimelineItem:
        return {
            "id": id,
            "label": label if label is not None else f"timeline {id}",
            "start": start,
            "end": end,
            "parent_ref": None,
        }

    return _make_timeline_item
