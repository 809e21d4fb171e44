# SPDX-License-Identifier: MIT

"""
Sources of "now".

Every computation pass should take one instant from a clock and pass it
down, or call freeze() once and hand the frozen clock to every consumer, so
that two items evaluated in the same pass never see different instants.

Instants are UTC. Calendar days (today(), and every "today" the CLI uses)
are taken in the clock's timezone, the local timezone unless given, so the
agenda and occurs_today() agree near midnight.
"""

from abc import ABC, abstractmethod

import pendulum

from cadence.time import now_utc, to_date


class Clock(ABC):
    def __init__(self, timezone: str = "local") -> None:
        self.timezone = timezone

    @abstractmethod
    def now(self) -> pendulum.DateTime: ...

    def today(self) -> pendulum.Date:
        """The calendar day of now() in the clock's timezone."""
        return to_date(self.now().in_tz(self.timezone))

    def freeze(self) -> "FixedClock":
        """Pin the current instant for a single recomputation pass."""
        return FixedClock(self.now(), self.timezone)


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> pendulum.DateTime:
        return now_utc()


class FixedClock(Clock):
    def __init__(self, instant: pendulum.DateTime, timezone: str = "local") -> None:
        super().__init__(timezone)
        self._instant = instant

    def now(self) -> pendulum.DateTime:
        return self._instant


class AdvancingClock(Clock):
    """
    A manually driven clock for tests and simulations.

    now() is stable between calls to advance(); each advance() moves the
    instant forward by the given pendulum duration keywords.
    """

    def __init__(self, start: pendulum.DateTime, timezone: str = "local") -> None:
        super().__init__(timezone)
        self._instant = start

    def now(self) -> pendulum.DateTime:
        return self._instant

    def advance(self, **duration: int | float) -> pendulum.DateTime:
        self._instant = self._instant.add(**duration)  # type: ignore[arg-type]
        return self._instant

    def set(self, instant: pendulum.DateTime) -> None:
        self._instant = instant


SYSTEM_CLOCK = SystemClock()
