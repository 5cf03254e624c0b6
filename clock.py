"""
Calendar clocks used for catalog freshness and license validity.
"""

from datetime import date, timedelta
from typing import Protocol


class Clock(Protocol):
    """Anything that can tell the current calendar day."""

    def today(self) -> date:
        ...


class SystemClock:
    """Local calendar day of the host."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock frozen on a given day, moved only explicitly.

    Used to simulate day boundaries deterministically.
    """

    def __init__(self, day: date):
        self._day = day

    def today(self) -> date:
        return self._day

    def set(self, day: date) -> None:
        self._day = day

    def advance(self, days: int = 1) -> date:
        self._day = self._day + timedelta(days=days)
        return self._day
