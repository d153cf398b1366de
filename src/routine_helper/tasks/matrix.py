# src/routine_helper/tasks/matrix.py

from __future__ import annotations

"""
Priority matrix engine.

Pure functions over task collections:
- classify: (importance, urgency) -> Quadrant (score > 50 is "high")
- sort_tasks: stable multi-key ordering with a priority-axis tie-break
- partition: open tasks -> four ordered quadrant buckets
- reassign / toggle_task: compute a TaskPatch for the store to apply

Nothing here mutates its inputs; callers hand results back to the store.
"""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import replace
from typing import Any

from ..core.ids import ensure_unique_ids, index_of
from .task_models import (
    DEFAULT_DIRECTIONS,
    Quadrant,
    SortDirection,
    SortKey,
    SortOption,
    Task,
    TaskPatch,
    clamp_score,
)

logger = logging.getLogger(__name__)

SPLIT_BOUNDARY = 50

# Canonical scores written when a task is moved into a quadrant.
QUADRANT_ANCHORS: dict[Quadrant, tuple[int, int]] = {
    Quadrant.URGENT_IMPORTANT: (75, 75),
    Quadrant.URGENT_NOT_IMPORTANT: (25, 75),
    Quadrant.NOT_URGENT_IMPORTANT: (75, 25),
    Quadrant.NOT_URGENT_NOT_IMPORTANT: (25, 25),
}

DEFAULT_SORT_OPTIONS: dict[Quadrant, SortOption] = {
    Quadrant.URGENT_IMPORTANT: SortOption(SortKey.URGENCY, SortDirection.DESC),
    Quadrant.URGENT_NOT_IMPORTANT: SortOption(SortKey.URGENCY, SortDirection.DESC),
    Quadrant.NOT_URGENT_IMPORTANT: SortOption(SortKey.IMPORTANCE, SortDirection.DESC),
    Quadrant.NOT_URGENT_NOT_IMPORTANT: SortOption(SortKey.IMPORTANCE, SortDirection.DESC),
}

_PRIMARY: dict[SortKey, Callable[[Task], Any]] = {
    SortKey.DUE_DATE: lambda t: t.due_date,
    SortKey.IMPORTANCE: lambda t: t.importance,
    SortKey.URGENCY: lambda t: t.urgency,
    SortKey.CREATED_AT: lambda t: t.created_at,
    SortKey.NAME: lambda t: t.name.casefold(),
}

# Secondary key, always descending. name/created have none (insertion order wins).
_TIE_BREAK: dict[SortKey, Callable[[Task], Any]] = {
    SortKey.IMPORTANCE: lambda t: t.urgency,
    SortKey.URGENCY: lambda t: t.importance,
    SortKey.DUE_DATE: lambda t: t.importance,
}


def classify(importance: Any, urgency: Any) -> Quadrant:
    imp = clamp_score(importance)
    urg = clamp_score(urgency)
    if (imp, urg) != (importance, urgency):
        logger.debug("Clamped scores importance=%r->%s urgency=%r->%s", importance, imp, urgency, urg)

    important = imp > SPLIT_BOUNDARY
    urgent = urg > SPLIT_BOUNDARY
    if urgent:
        return Quadrant.URGENT_IMPORTANT if important else Quadrant.URGENT_NOT_IMPORTANT
    return Quadrant.NOT_URGENT_IMPORTANT if important else Quadrant.NOT_URGENT_NOT_IMPORTANT


def classify_task(task: Task) -> Quadrant:
    return classify(task.importance, task.urgency)


def _resolve_option(
    key: SortKey | SortOption | str, direction: SortDirection | str | None
) -> SortOption:
    if isinstance(key, SortOption):
        option = key
    elif isinstance(key, SortKey):
        option = SortOption(key, DEFAULT_DIRECTIONS[key])
    else:
        option = SortOption.parse(key)
    if direction is None:
        return option
    return SortOption(option.key, SortDirection.parse(direction))


def sort_tasks(
    tasks: Iterable[Task],
    key: SortKey | SortOption | str,
    direction: SortDirection | str | None = None,
) -> list[Task]:
    """
    Return a new list ordered by `key`.

    - direction flips only the primary comparison; the tie-break is always descending
    - tasks without a due date go last when sorting by due date, in either direction
    - equal elements keep their input order
    """
    option = _resolve_option(key, direction)
    items = list(tasks)

    tie_break = _TIE_BREAK.get(option.key)
    if tie_break is not None:
        items.sort(key=tie_break, reverse=True)

    reverse = option.direction is SortDirection.DESC
    primary = _PRIMARY[option.key]

    if option.key is SortKey.DUE_DATE:
        dated = [t for t in items if t.due_date is not None]
        undated = [t for t in items if t.due_date is None]
        dated.sort(key=primary, reverse=reverse)
        return dated + undated

    items.sort(key=primary, reverse=reverse)
    return items


def partition(
    tasks: Iterable[Task],
    sort_options: Mapping[Quadrant | str, SortOption | str] | None = None,
) -> dict[Quadrant, list[Task]]:
    """
    Bucket open tasks into the four quadrants, each bucket sorted.

    Completed tasks are left out. Every quadrant key is present, possibly empty.
    """
    items = list(tasks)
    ensure_unique_ids(items, "task")

    options = dict(DEFAULT_SORT_OPTIONS)
    for raw_quadrant, opt in (sort_options or {}).items():
        quadrant = raw_quadrant if isinstance(raw_quadrant, Quadrant) else Quadrant.parse(raw_quadrant)
        options[quadrant] = opt if isinstance(opt, SortOption) else SortOption.parse(opt)

    buckets: dict[Quadrant, list[Task]] = {q: [] for q in Quadrant}
    for task in items:
        if task.completed:
            continue
        buckets[classify_task(task)].append(task)

    return {q: sort_tasks(bucket, options[q]) for q, bucket in buckets.items()}


def reassign(tasks: Sequence[Task], task_id: str, target: Quadrant | str) -> TaskPatch:
    """
    Compute the score update for moving a task into `target`.

    Raises NotFoundError for an unknown id. Moving a task into the quadrant
    it already sits in still yields the anchor scores, so repeating a move
    is a no-op.
    """
    quadrant = target if isinstance(target, Quadrant) else Quadrant.parse(target)
    task = tasks[index_of(tasks, task_id, "task")]
    importance, urgency = QUADRANT_ANCHORS[quadrant]
    logger.debug(
        "Reassign task=%s %s -> %s (importance=%s urgency=%s)",
        task.id,
        classify_task(task).value,
        quadrant.value,
        importance,
        urgency,
    )
    return TaskPatch(task.id, {"importance": importance, "urgency": urgency})


def toggle_task(tasks: Sequence[Task], task_id: str) -> TaskPatch:
    task = tasks[index_of(tasks, task_id, "task")]
    return TaskPatch(task.id, {"completed": not task.completed})


def apply_task_patch(tasks: Sequence[Task], patch: TaskPatch) -> list[Task]:
    """Return a copy of `tasks` with `patch` applied. The input is left untouched."""
    items = list(tasks)
    idx = index_of(items, patch.task_id, "task")
    items[idx] = replace(items[idx], **patch.fields)
    return items


def move_task(tasks: Sequence[Task], task_id: str, target: Quadrant | str) -> list[Task]:
    return apply_task_patch(tasks, reassign(tasks, task_id, target))
