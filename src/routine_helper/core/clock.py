# src/routine_helper/core/clock.py

from __future__ import annotations

"""
Clock collaborators.

The engines never read the wall clock; callers ask a Clock for "today"
and pass it in explicitly.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone

from .dates import format_day, parse_day


class SystemClock:
    """Local-time clock used in production."""

    def today(self) -> str:
        return format_day(datetime.now().astimezone().date())

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(slots=True, frozen=True)
class FixedClock:
    """Clock pinned to a single day (tests, ROUTINE_TODAY override)."""

    day: str

    def __post_init__(self) -> None:
        parse_day(self.day)

    def today(self) -> str:
        return self.day

    def now(self) -> datetime:
        d: date = parse_day(self.day)
        return datetime(d.year, d.month, d.day, 12, 0, tzinfo=timezone.utc)
