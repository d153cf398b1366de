# src/routine_helper/storage/snapshot.py

from __future__ import annotations

"""
JSON snapshot codec.

Field names follow the camelCase records the web client keeps in local
storage (createdAt, targetDays, completedDates, ...), so a snapshot exported
there can be loaded here and vice versa.
"""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..core.dates import format_day, parse_day
from ..core.errors import ContractViolationError
from ..routines.routine_models import COLORS, Routine
from ..tasks.task_models import Task

SNAPSHOT_VERSION = 1


def _parse_ts(raw: Any) -> datetime:
    if isinstance(raw, (int, float)):
        return datetime.fromtimestamp(float(raw) / 1000.0, tz=timezone.utc)
    if not isinstance(raw, str) or not raw:
        raise ContractViolationError(f"invalid createdAt: {raw!r}")
    try:
        # JS toISOString() ends with "Z".
        ts = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as e:
        raise ContractViolationError(f"invalid createdAt: {raw!r}") from e
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "name": task.name,
        "description": task.description,
        "importance": task.importance,
        "urgency": task.urgency,
        "completed": task.completed,
        "createdAt": task.created_at.isoformat(),
        "dueDate": format_day(task.due_date) if task.due_date else None,
        "tags": sorted(task.tags),
    }


def task_from_dict(d: dict[str, Any]) -> Task:
    due = d.get("dueDate")
    return Task(
        id=str(d.get("id") or ""),
        name=str(d.get("name") or ""),
        description=str(d.get("description") or ""),
        importance=d.get("importance", 50),
        urgency=d.get("urgency", 50),
        completed=bool(d.get("completed", False)),
        created_at=_parse_ts(d.get("createdAt")),
        due_date=parse_day(due) if due else None,
        tags=frozenset(str(t) for t in (d.get("tags") or [])),
    )


def routine_to_dict(routine: Routine) -> dict[str, Any]:
    return {
        "id": routine.id,
        "name": routine.name,
        "description": routine.description,
        "category": routine.category,
        "targetDays": routine.target_days,
        "color": routine.color,
        "createdAt": routine.created_at.isoformat(),
        "completedDates": sorted(routine.completed_dates),
    }


def routine_from_dict(d: dict[str, Any]) -> Routine:
    return Routine(
        id=str(d.get("id") or ""),
        name=str(d.get("name") or ""),
        description=str(d.get("description") or ""),
        category=str(d.get("category") or ""),
        target_days=d.get("targetDays"),
        color=str(d.get("color") or COLORS[0]),
        created_at=_parse_ts(d.get("createdAt")),
        completed_dates=frozenset(d.get("completedDates") or []),
    )


def dump_snapshot(tasks: tuple[Task, ...], routines: tuple[Routine, ...]) -> dict[str, Any]:
    return {
        "version": SNAPSHOT_VERSION,
        "tasks": [task_to_dict(t) for t in tasks],
        "routines": [routine_to_dict(r) for r in routines],
    }


def parse_snapshot(data: Any) -> tuple[list[Task], list[Routine]]:
    if not isinstance(data, dict):
        raise ContractViolationError("snapshot must be a JSON object")
    raw_tasks = data.get("tasks") or []
    raw_routines = data.get("routines") or []
    if not isinstance(raw_tasks, list) or not isinstance(raw_routines, list):
        raise ContractViolationError("snapshot tasks/routines must be lists")
    tasks = [task_from_dict(t) for t in raw_tasks if isinstance(t, dict)]
    routines = [routine_from_dict(r) for r in raw_routines if isinstance(r, dict)]
    return tasks, routines


def read_snapshot(path: str | Path) -> tuple[list[Task], list[Routine]]:
    return parse_snapshot(json.loads(Path(path).read_text("utf-8")))


def write_snapshot(path: str | Path, tasks: tuple[Task, ...], routines: tuple[Routine, ...]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    tmp.write_text(json.dumps(dump_snapshot(tasks, routines), ensure_ascii=False, indent=2), "utf-8")
    os.replace(tmp, path)
