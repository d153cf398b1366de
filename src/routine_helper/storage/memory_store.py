# src/routine_helper/storage/memory_store.py

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date, datetime, timezone

from ..core.dates import parse_day
from ..core.ids import ensure_unique_ids, index_of
from ..routines.routine_models import COLORS, DEFAULT_TARGET_DAYS, Routine, RoutinePatch
from ..tasks.matrix import apply_task_patch
from ..tasks.task_models import DEFAULT_SCORE, Task, TaskPatch

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class InMemoryStore:
    """
    Store collaborator holding the task and routine collections.

    - snapshots are tuples of frozen records, safe to hand to the engines
    - full replacement and single-entity patches are all-or-nothing
    - ids and created_at are assigned here, never by the engines

    Thread-safety:
    - every public method holds one re-entrant lock
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        routines: Iterable[Routine] = (),
        *,
        now: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._lock = threading.RLock()
        self._now = now
        self._new_id = id_factory
        self._tasks: tuple[Task, ...] = ()
        self._routines: tuple[Routine, ...] = ()
        self.replace_tasks(tasks)
        self.replace_routines(routines)
        logger.info("InMemoryStore ready tasks=%d routines=%d", len(self._tasks), len(self._routines))

    # ---- tasks ----

    def list_tasks(self) -> tuple[Task, ...]:
        with self._lock:
            return self._tasks

    def get_task(self, task_id: str) -> Task:
        with self._lock:
            return self._tasks[index_of(self._tasks, task_id, "task")]

    def replace_tasks(self, tasks: Iterable[Task]) -> None:
        items = tuple(tasks)
        ensure_unique_ids(items, "task")
        with self._lock:
            self._tasks = items

    def add_task(
        self,
        *,
        name: str,
        importance: int = DEFAULT_SCORE,
        urgency: int = DEFAULT_SCORE,
        description: str = "",
        due_date: str | date | None = None,
        tags: Iterable[str] | None = None,
    ) -> Task:
        task = Task(
            id=self._new_id(),
            name=name.strip() if name else name,
            importance=importance,
            urgency=urgency,
            created_at=self._now(),
            description=(description or "").strip(),
            due_date=parse_day(due_date) if due_date is not None else None,
            tags=frozenset(tags or ()),
        )
        with self._lock:
            self._tasks = (*self._tasks, task)
        logger.info("Task added id=%s importance=%s urgency=%s", task.id, task.importance, task.urgency)
        return task

    def patch_task(self, patch: TaskPatch) -> Task:
        fields = dict(patch.fields)
        if fields.get("due_date") is not None:
            fields["due_date"] = parse_day(fields["due_date"])
        with self._lock:
            updated = apply_task_patch(self._tasks, TaskPatch(patch.task_id, fields))
            self._tasks = tuple(updated)
            task = self._tasks[index_of(self._tasks, patch.task_id, "task")]
        logger.info("Task patched id=%s fields=%s", task.id, sorted(fields))
        return task

    def delete_task(self, task_id: str) -> None:
        with self._lock:
            index_of(self._tasks, task_id, "task")
            self._tasks = tuple(t for t in self._tasks if t.id != task_id)
        logger.info("Task deleted id=%s", task_id)

    # ---- routines ----

    def list_routines(self) -> tuple[Routine, ...]:
        with self._lock:
            return self._routines

    def get_routine(self, routine_id: str) -> Routine:
        with self._lock:
            return self._routines[index_of(self._routines, routine_id, "routine")]

    def replace_routines(self, routines: Iterable[Routine]) -> None:
        items = tuple(routines)
        ensure_unique_ids(items, "routine")
        with self._lock:
            self._routines = items

    def add_routine(
        self,
        *,
        name: str,
        category: str,
        target_days: int = DEFAULT_TARGET_DAYS,
        description: str = "",
        color: str | None = None,
    ) -> Routine:
        routine = Routine(
            id=self._new_id(),
            name=name.strip() if name else name,
            category=category,
            target_days=target_days,
            created_at=self._now(),
            description=(description or "").strip(),
            color=color or COLORS[0],
        )
        with self._lock:
            self._routines = (*self._routines, routine)
        logger.info("Routine added id=%s category=%s target_days=%s", routine.id, category, target_days)
        return routine

    def patch_routine(self, patch: RoutinePatch) -> Routine:
        with self._lock:
            idx = index_of(self._routines, patch.routine_id, "routine")
            # Validation runs in Routine.__post_init__ before anything is swapped in.
            routine = replace(self._routines[idx], **patch.fields)
            items = list(self._routines)
            items[idx] = routine
            self._routines = tuple(items)
        logger.info("Routine patched id=%s fields=%s", routine.id, sorted(patch.fields))
        return routine

    def save_routine(self, routine: Routine) -> Routine:
        """Swap in an already-computed routine value (e.g. from toggle_completion)."""
        return self.patch_routine(
            RoutinePatch(routine.id, {"completed_dates": routine.completed_dates})
        )

    def delete_routine(self, routine_id: str) -> None:
        with self._lock:
            index_of(self._routines, routine_id, "routine")
            self._routines = tuple(r for r in self._routines if r.id != routine_id)
        logger.info("Routine deleted id=%s", routine_id)
