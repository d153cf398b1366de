# src/routine_helper/routines/progress.py

from __future__ import annotations

"""
Routine progress engine: streaks, completion rates and the "today" overview.

"today" is always an argument. Nothing in this module reads a clock.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, timedelta

from ..core.dates import format_day, parse_day
from .routine_models import Routine

logger = logging.getLogger(__name__)


def streak(completed_dates: Iterable[str | date], today: str | date) -> int:
    """
    Count consecutive completed days walking backward from `today`.

    The walk stops at the first missing day, so a missing `today` gives 0.
    Dates after `today` are never visited.
    """
    days = {parse_day(d) for d in completed_dates}
    current = parse_day(today)
    count = 0
    while current in days:
        count += 1
        current -= timedelta(days=1)
    return count


def completion_rate(completed: int, target_days: int) -> float:
    """Completed/target as a percentage, uncapped. Non-positive targets give 0."""
    if target_days <= 0:
        return 0.0
    return completed / target_days * 100.0


def routine_rate(routine: Routine) -> float:
    return completion_rate(routine.completed_count, routine.target_days)


def is_finished(routine: Routine) -> bool:
    return routine.completed_count >= routine.target_days


def toggle_completion(routine: Routine, day: str | date) -> Routine:
    """Return a copy with `day` added to completed_dates, or removed if already there."""
    key = format_day(parse_day(day))
    if key in routine.completed_dates:
        dates = routine.completed_dates - {key}
    else:
        dates = routine.completed_dates | {key}
    logger.debug("Toggle routine=%s day=%s done=%s", routine.id, key, key in dates)
    return replace(routine, completed_dates=dates)


def active_routines(routines: Iterable[Routine]) -> list[Routine]:
    return [r for r in routines if not is_finished(r)]


@dataclass(slots=True, frozen=True)
class RoutineProgress:
    routine_id: str
    streak: int
    completed: int
    target_days: int
    rate: float
    bar_value: float
    finished: bool
    completed_today: bool


def routine_progress(routine: Routine, today: str | date) -> RoutineProgress:
    rate = routine_rate(routine)
    today_key = format_day(parse_day(today))
    return RoutineProgress(
        routine_id=routine.id,
        streak=streak(routine.completed_dates, today_key),
        completed=routine.completed_count,
        target_days=routine.target_days,
        rate=rate,
        bar_value=min(rate, 100.0),
        finished=is_finished(routine),
        completed_today=today_key in routine.completed_dates,
    )


@dataclass(slots=True, frozen=True)
class TodayProgress:
    completed_today: int
    active_total: int
    rate: float


def today_progress(routines: Iterable[Routine], today: str | date) -> TodayProgress:
    """Share of active (unfinished) routines already checked off today."""
    today_key = format_day(parse_day(today))
    active = active_routines(routines)
    done = sum(1 for r in active if today_key in r.completed_dates)
    total = len(active)
    rate = done / total * 100.0 if total else 0.0
    return TodayProgress(completed_today=done, active_total=total, rate=rate)
