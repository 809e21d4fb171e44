# SPDX-License-Identifier: MIT

import pendulum
import pytest

from cadence.errors import ErrorChannel
from cadence.service.timeline import (
    MIN_WIDTH_PERCENT,
    intervals_overlap,
    layout,
    layout_items,
)

OCTOBER_START = pendulum.date(2024, 10, 1)
OCTOBER_END = pendulum.date(2024, 10, 31)


def test_item_running_past_the_window_is_clipped():
    bar = layout(
        OCTOBER_START,
        OCTOBER_END,
        pendulum.date(2024, 10, 30),
        pendulum.date(2024, 11, 2),
    )
    assert bar["visible"]
    assert bar["offset_percent"] == pytest.approx(93.548, abs=0.01)
    assert bar["width_percent"] == pytest.approx(6.452, abs=0.01)
    assert bar["offset_percent"] + bar["width_percent"] == pytest.approx(100)


def test_full_window_item():
    bar = layout(
        OCTOBER_START,
        OCTOBER_END,
        pendulum.date(2024, 9, 1),
        pendulum.date(2024, 12, 1),
    )
    assert bar == {"offset_percent": 0.0, "width_percent": 100.0, "visible": True}


def test_single_day_item_gets_one_day_width():
    bar = layout(
        OCTOBER_START,
        OCTOBER_END,
        pendulum.date(2024, 10, 11),
        pendulum.date(2024, 10, 11),
    )
    assert bar["offset_percent"] == pytest.approx(100 * 10 / 31)
    assert bar["width_percent"] == pytest.approx(100 / 31)


def test_floor_applies_to_narrow_days():
    window_end = OCTOBER_START.add(days=99)
    bar = layout(OCTOBER_START, window_end, OCTOBER_START, OCTOBER_START)
    assert bar["width_percent"] == MIN_WIDTH_PERCENT


def test_floor_at_the_right_edge_shifts_left():
    window_end = OCTOBER_START.add(days=99)
    bar = layout(OCTOBER_START, window_end, window_end, window_end)
    assert bar["width_percent"] == MIN_WIDTH_PERCENT
    assert bar["offset_percent"] == pytest.approx(100 - MIN_WIDTH_PERCENT)


def test_bounds_for_overlapping_intervals():
    for start_offset in range(-10, 35, 3):
        for length in range(0, 20, 4):
            item_start = OCTOBER_START.add(days=start_offset)
            item_end = item_start.add(days=length)
            bar = layout(OCTOBER_START, OCTOBER_END, item_start, item_end)
            if not bar["visible"]:
                continue
            assert bar["offset_percent"] >= 0
            assert bar["width_percent"] >= MIN_WIDTH_PERCENT
            assert bar["offset_percent"] + bar["width_percent"] <= 100 + 1e-9


def test_items_outside_the_window_are_not_visible():
    bar = layout(
        OCTOBER_START,
        OCTOBER_END,
        pendulum.date(2024, 11, 5),
        pendulum.date(2024, 11, 8),
    )
    assert not bar["visible"]


def test_malformed_interval_is_a_point_at_its_start():
    errors = ErrorChannel()
    bar = layout(
        OCTOBER_START,
        OCTOBER_END,
        pendulum.date(2024, 10, 11),
        pendulum.date(2024, 10, 5),
        errors=errors,
        item_id="backwards",
    )

    assert bar["offset_percent"] == pytest.approx(100 * 10 / 31)
    assert bar["width_percent"] == MIN_WIDTH_PERCENT
    assert bar["visible"]
    assert errors.has_errors("malformed_interval")
    assert errors.reports[0]["entity_id"] == "backwards"


def test_malformed_window_is_a_single_day():
    errors = ErrorChannel()
    bar = layout(
        OCTOBER_END,
        OCTOBER_START,
        OCTOBER_END,
        OCTOBER_END,
        errors=errors,
    )
    assert bar["offset_percent"] == 0.0
    assert bar["width_percent"] == 100.0
    assert len(errors) == 1


def test_datetimes_are_reduced_to_days():
    bar = layout(
        pendulum.datetime(2024, 10, 1, 23, tz="UTC"),
        pendulum.datetime(2024, 10, 31, 1, tz="UTC"),
        pendulum.datetime(2024, 10, 30, 12, tz="UTC"),
        pendulum.datetime(2024, 11, 2, 8, tz="UTC"),
    )
    assert bar["offset_percent"] == pytest.approx(100 * 29 / 31)


def test_intervals_overlap_is_inclusive():
    assert intervals_overlap(
        OCTOBER_START, OCTOBER_END, OCTOBER_END, OCTOBER_END.add(days=3)
    )
    assert not intervals_overlap(
        OCTOBER_START, OCTOBER_END, OCTOBER_END.add(days=1), OCTOBER_END.add(days=3)
    )


def test_layout_items_sorts_and_filters(make_timeline_item):
    items = [
        make_timeline_item("late", pendulum.date(2024, 10, 20), pendulum.date(2024, 10, 22)),
        make_timeline_item("outside", pendulum.date(2024, 12, 1), pendulum.date(2024, 12, 2)),
        make_timeline_item("early", pendulum.date(2024, 9, 28), pendulum.date(2024, 10, 2)),
    ]

    bars = layout_items(OCTOBER_START, OCTOBER_END, items)
    assert [item["id"] for item, _ in bars] == ["early", "late"]

    all_bars = layout_items(OCTOBER_START, OCTOBER_END, items, visible_only=False)
    assert [item["id"] for item, _ in all_bars] == ["early", "late", "outside"]
    assert not all_bars[-1][1]["visible"]
