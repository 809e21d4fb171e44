# SPDX-License-Identifier: MIT

import pendulum
import pytest

from cadence import configuration
from cadence.errors import ItemSourceFailure
from cadence.model.frequency_rule import FrequencyRule
from cadence.repository.activity import ACTIVITY_REPO
from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.repository.deadline_item import DEADLINE_ITEM_REPO
from cadence.repository.read_marker import READ_MARKER_REPO
from cadence.repository.timeline_item import TIMELINE_ITEM_REPO


def test_activities_are_loaded_and_invalid_ones_rejected(write_data):
    write_data(
        "activities.yaml",
        {
            "activities": [
                {
                    "id": "run",
                    "category": "health",
                    "name": "Run",
                    "frequency": "Bi-Weekly",
                    "start_date": "2024-01-03",
                },
                {
                    "id": "ambiguous",
                    "category": "health",
                    "name": "Swim",
                    "frequency": "weekly weekend",
                    "start_date": "2024-01-03",
                },
                {
                    "id": "undated",
                    "category": "work",
                    "name": "Review",
                    "frequency": "daily",
                    "start_date": "soon",
                },
            ]
        },
    )

    activities = ACTIVITY_REPO.get_all_activities()
    assert [activity["id"] for activity in activities] == ["run"]
    assert activities[0]["frequency_rule"] == FrequencyRule.BIWEEKLY
    assert activities[0]["start_date"] == pendulum.date(2024, 1, 3)

    rejected = ACTIVITY_REPO.get_rejected()
    assert [report["entity_id"] for report in rejected] == ["ambiguous", "undated"]
    assert {report["error_kind"] for report in rejected} == {"invalid_recurrence_rule"}
    assert ACTIVITY_REPO.get_categories() == ["health"]


def test_unquoted_yaml_dates_are_accepted(data_path):
    (data_path / "activities.yaml").write_text(
        "activities:\n"
        "- id: run\n"
        "  category: health\n"
        "  name: Run\n"
        "  frequency: weekly\n"
        "  start_date: 2024-01-03\n"
    )
    activities = ACTIVITY_REPO.get_all_activities()
    assert activities[0]["start_date"] == pendulum.date(2024, 1, 3)


def test_invalid_unquoted_deadline_is_kept_as_text(data_path):
    (data_path / "deadlines.yaml").write_text(
        "deadlines:\n"
        "- id: good\n"
        "  kind: task_reminder\n"
        "  deadline_at: 2024-10-15 11:30:00\n"
        "- id: bad\n"
        "  kind: task_reminder\n"
        "  deadline_at: 2024-13-45\n"
    )
    items = DEADLINE_ITEM_REPO.fetch_deadline_items()
    assert [item["id"] for item in items] == ["good", "bad"]
    assert items[0]["deadline_at"] == pendulum.datetime(2024, 10, 15, 11, 30, tz="UTC")
    assert items[1]["deadline_at"] == "2024-13-45"


def test_non_mapping_activity_is_rejected(data_path):
    (data_path / "activities.yaml").write_text(
        "activities:\n"
        "- id: run\n"
        "  category: health\n"
        "  name: Run\n"
        "  frequency: weekly\n"
        "  start_date: 2024-01-03\n"
        "- just a string\n"
    )
    assert [a["id"] for a in ACTIVITY_REPO.get_all_activities()] == ["run"]
    rejected = ACTIVITY_REPO.get_rejected()
    assert len(rejected) == 1
    assert rejected[0]["error_kind"] == "invalid_recurrence_rule"


def test_unreadable_activities_file_is_reported(data_path):
    (data_path / "activities.yaml").write_text("activities: [unclosed")
    assert ACTIVITY_REPO.get_all_activities() == []
    assert [report["error_kind"] for report in ACTIVITY_REPO.get_rejected()] == [
        "item_source_failure"
    ]

    ACTIVITY_REPO.reset()
    (data_path / "activities.yaml").write_text("activities: run\n")
    assert ACTIVITY_REPO.get_all_activities() == []
    assert ACTIVITY_REPO.get_rejected()[0]["error_kind"] == "item_source_failure"


def test_deadline_items_are_normalized_and_filtered(data_path):
    (data_path / "deadlines.yaml").write_text(
        "deadlines:\n"
        "- id: r1\n"
        "  kind: task_reminder\n"
        "  label: Call the bank\n"
        "  deadline_at: 2024-10-15 11:30:00\n"
        "  parent_ref: finances\n"
        "- id: 7\n"
        "  kind: sprint_deadline\n"
        "  label: Sprint 12\n"
        "  deadline_at: '2024-10-16T09:00:00+02:00'\n"
        "  is_finalized: true\n"
        "- id: s1\n"
        "  kind: task_slot\n"
        "  deadline_at: whenever\n"
        "- id: s2\n"
        "  kind: task_slot\n"
    )

    items = DEADLINE_ITEM_REPO.fetch_deadline_items()
    assert [item["id"] for item in items] == ["r1", "7", "s1", "s2"]
    assert items[0]["deadline_at"] == pendulum.datetime(2024, 10, 15, 11, 30, tz="UTC")
    assert items[1]["deadline_at"] == pendulum.datetime(2024, 10, 16, 7, tz="UTC")
    assert items[1]["is_finalized"]
    assert items[2]["deadline_at"] == "whenever"
    assert items[3]["deadline_at"] is None
    assert not items[3]["has_running_timer"]

    assert [
        item["id"]
        for item in DEADLINE_ITEM_REPO.fetch_deadline_items({"kinds": ["task_slot"]})
    ] == ["s1", "s2"]
    assert [
        item["id"]
        for item in DEADLINE_ITEM_REPO.fetch_deadline_items({"parent_ref": "finances"})
    ] == ["r1"]
    assert "7" not in [
        item["id"]
        for item in DEADLINE_ITEM_REPO.fetch_deadline_items({"include_finalized": False})
    ]


def test_deadline_source_failures(write_data, data_path):
    with pytest.raises(ItemSourceFailure):
        DEADLINE_ITEM_REPO.fetch_deadline_items()

    write_data("deadlines.yaml", {"deadlines": [{"id": "x", "kind": "meeting"}]})
    with pytest.raises(ItemSourceFailure):
        DEADLINE_ITEM_REPO.fetch_deadline_items()

    write_data("deadlines.yaml", {"deadlines": [{"kind": "task_slot"}]})
    with pytest.raises(ItemSourceFailure):
        DEADLINE_ITEM_REPO.fetch_deadline_items()

    (data_path / "deadlines.yaml").write_text("deadlines: [unclosed")
    with pytest.raises(ItemSourceFailure):
        DEADLINE_ITEM_REPO.fetch_deadline_items()


def test_timeline_items_default_to_a_single_day(write_data):
    write_data(
        "timeline.yaml",
        {
            "items": [
                {"id": "t1", "label": "Sprint", "start": "2024-10-30", "end": "2024-11-02"},
                {"id": "t2", "label": "Release", "start": "2024-10-15"},
            ]
        },
    )
    items = TIMELINE_ITEM_REPO.get_all_items()
    assert items[0]["end"] == pendulum.date(2024, 11, 2)
    assert items[1]["start"] == items[1]["end"] == pendulum.date(2024, 10, 15)
    assert items[1]["parent_ref"] is None


def test_timeline_items_with_unreadable_dates_are_rejected(data_path):
    (data_path / "timeline.yaml").write_text(
        "items:\n"
        "- id: t1\n"
        "  label: Sprint\n"
        "  start: 2024-10-30\n"
        "  end: 2024-11-02\n"
        "- id: t2\n"
        "  label: Someday\n"
        "  start: 'soonish'\n"
        "- id: t3\n"
        "  label: Floating\n"
        "- id: t4\n"
        "  label: Broken end\n"
        "  start: 2024-10-01\n"
        "  end: 2024-13-45\n"
    )
    items = TIMELINE_ITEM_REPO.get_all_items()
    assert [item["id"] for item in items] == ["t1"]
    assert items[0]["start"] == pendulum.date(2024, 10, 30)

    rejected = TIMELINE_ITEM_REPO.get_rejected()
    assert [report["entity_id"] for report in rejected] == ["t2", "t3", "t4"]
    assert {report["error_kind"] for report in rejected} == {"malformed_interval"}


def test_unreadable_timeline_file_is_reported(data_path):
    (data_path / "timeline.yaml").write_text("items: [unclosed")
    assert TIMELINE_ITEM_REPO.get_all_items() == []
    assert TIMELINE_ITEM_REPO.get_rejected()[0]["error_kind"] == "item_source_failure"


def test_read_markers_are_written_through(data_path):
    READ_MARKER_REPO.save_marker("alice", "task_reminder", "a")
    READ_MARKER_REPO.save_marker("alice", "task_reminder", "a")
    READ_MARKER_REPO.save_marker("bob", "task_slot", "s")

    READ_MARKER_REPO.reset()
    assert READ_MARKER_REPO.load_markers("alice") == {("task_reminder", "a")}
    assert READ_MARKER_REPO.load_markers("bob") == {("task_slot", "s")}
    assert READ_MARKER_REPO.load_markers("carol") == set()

    READ_MARKER_REPO.delete_marker("alice", "task_reminder", "a")
    READ_MARKER_REPO.reset()
    assert READ_MARKER_REPO.load_markers("alice") == set()


def test_read_markers_with_numeric_ids(data_path):
    (data_path / "read_markers.yaml").write_text(
        "markers:\n"
        "  alice:\n"
        "  - kind: task_reminder\n"
        "    id: 7\n"
    )
    READ_MARKER_REPO.save_marker("alice", "task_reminder", "7")
    READ_MARKER_REPO.reset()
    assert READ_MARKER_REPO.load_markers("alice") == {("task_reminder", "7")}
    assert len(READ_MARKER_REPO.read_markers["markers"]["alice"]) == 1

    READ_MARKER_REPO.delete_marker("alice", "task_reminder", "7")
    READ_MARKER_REPO.reset()
    assert READ_MARKER_REPO.load_markers("alice") == set()


def test_configuration_defaults_and_updates():
    config = CONFIGURATION_REPO.get_config()
    assert config == configuration.DEFAULT_CONFIGURATION
    assert CONFIGURATION_REPO.get_due_soon_window() == pendulum.duration(minutes=30)

    CONFIGURATION_REPO.update_config(due_soon_minutes=120, log_level="debug")
    assert CONFIGURATION_REPO.flush()
    assert not CONFIGURATION_REPO.flush()

    CONFIGURATION_REPO.reset()
    config = CONFIGURATION_REPO.get_config()
    assert config["due_soon_minutes"] == 120
    assert config["log_level"] == "DEBUG"
    assert config["user_id"] == "default"


def test_configuration_backfills_missing_keys():
    configuration.APP_CONFIG_PATH.write_text("user_id: alice\n")
    config = CONFIGURATION_REPO.get_config()
    assert config["user_id"] == "alice"
    assert config["preview_limit"] == 5
