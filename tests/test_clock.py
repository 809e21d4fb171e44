# SPDX-License-Identifier: MIT

import pendulum

from cadence.clock import SYSTEM_CLOCK, AdvancingClock, FixedClock


def test_fixed_clock_returns_same_instant(now):
    clock = FixedClock(now, "UTC")
    assert clock.now() == now
    assert clock.now() == now
    assert clock.today() == pendulum.date(2024, 10, 15)


def test_advancing_clock_moves_only_on_advance(now):
    clock = AdvancingClock(now, "UTC")
    assert clock.now() == now

    clock.advance(minutes=90)
    assert clock.now() == pendulum.datetime(2024, 10, 15, 11, 30, tz="UTC")

    clock.advance(days=1)
    assert clock.today() == pendulum.date(2024, 10, 16)

    clock.set(now)
    assert clock.now() == now


def test_freeze_pins_the_instant(now):
    clock = AdvancingClock(now)
    frozen = clock.freeze()
    clock.advance(hours=1)
    assert frozen.now() == now


def test_system_clock_is_utc():
    assert SYSTEM_CLOCK.now().timezone_name == "UTC"


def test_today_uses_the_clock_timezone():
    late_evening_utc = pendulum.datetime(2024, 10, 15, 23, 30, tz="UTC")
    assert FixedClock(late_evening_utc, "UTC").today() == pendulum.date(2024, 10, 15)
    assert FixedClock(late_evening_utc, "Asia/Tokyo").today() == pendulum.date(
        2024, 10, 16
    )
    assert FixedClock(late_evening_utc, "Asia/Tokyo").freeze().today() == (
        pendulum.date(2024, 10, 16)
    )
