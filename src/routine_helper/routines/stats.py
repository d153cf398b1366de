# src/routine_helper/routines/stats.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from ..core.dates import format_day, parse_day
from ..core.ids import ensure_unique_ids
from .progress import routine_rate, streak
from .routine_models import Routine

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CategoryStats:
    count: int = 0
    completions: int = 0


@dataclass(slots=True, frozen=True)
class RoutineStats:
    total_routines: int
    total_completions: int
    average_completion_rate: float
    best_routine: Routine | None
    longest_streak: int
    per_category: dict[str, CategoryStats] = field(default_factory=dict)

    @property
    def best_rate(self) -> float:
        return routine_rate(self.best_routine) if self.best_routine is not None else 0.0


def aggregate(routines: Iterable[Routine], today: str | date) -> RoutineStats:
    """
    Whole-collection statistics.

    - average_completion_rate: mean of per-routine rates (percent, uncapped)
    - best_routine: highest rate, first one wins a tie, None only for an empty input
    - per_category: grouped by the category text as-is (no trimming/casefolding)
    """
    items = list(routines)
    ensure_unique_ids(items, "routine")
    today_key = format_day(parse_day(today))

    total_completions = 0
    rate_sum = 0.0
    best: Routine | None = None
    best_rate = 0.0
    longest = 0
    per_category: dict[str, CategoryStats] = {}

    for routine in items:
        rate = routine_rate(routine)
        total_completions += routine.completed_count
        rate_sum += rate

        if best is None or rate > best_rate:
            best, best_rate = routine, rate

        longest = max(longest, streak(routine.completed_dates, today_key))

        cat = per_category.setdefault(routine.category, CategoryStats())
        cat.count += 1
        cat.completions += routine.completed_count

    average = rate_sum / len(items) if items else 0.0
    logger.debug(
        "Aggregated routines=%d completions=%d avg=%.1f longest_streak=%d",
        len(items),
        total_completions,
        average,
        longest,
    )
    return RoutineStats(
        total_routines=len(items),
        total_completions=total_completions,
        average_completion_rate=average,
        best_routine=best,
        longest_streak=longest,
        per_category=per_category,
    )
