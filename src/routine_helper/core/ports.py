# src/routine_helper/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) around the engines.

The engines themselves take plain collections; these Protocols describe the
collaborators the CLI wires together, so a local store, a remote backend or a
test fake can be swapped without touching the engine code.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Any, Protocol


class Clock(Protocol):
    """Supplies "today" as YYYY-MM-DD. The engines never read a system clock."""

    def today(self) -> str: ...
    def now(self) -> datetime: ...


class TaskRepo(Protocol):
    # Snapshots
    def list_tasks(self) -> tuple[Any, ...]: ...
    def get_task(self, task_id: str) -> Any: ...
    def replace_tasks(self, tasks: Iterable[Any]) -> None: ...

    # Single-entity patch: {id, fieldUpdates}
    def patch_task(self, patch: Any) -> Any: ...

    # Creation / removal (ids and timestamps are assigned here)
    def add_task(
            self,
            *,
            name: str,
            importance: int = 50,
            urgency: int = 50,
            description: str = "",
            due_date: Any = None,
            tags: Iterable[str] | None = None,
    ) -> Any: ...
    def delete_task(self, task_id: str) -> None: ...


class RoutineRepo(Protocol):
    def list_routines(self) -> tuple[Any, ...]: ...
    def get_routine(self, routine_id: str) -> Any: ...
    def replace_routines(self, routines: Iterable[Any]) -> None: ...
    def patch_routine(self, patch: Any) -> Any: ...
    def save_routine(self, routine: Any) -> Any: ...

    def add_routine(
            self,
            *,
            name: str,
            category: str,
            target_days: int = 30,
            description: str = "",
            color: str | None = None,
    ) -> Any: ...
    def delete_routine(self, routine_id: str) -> None: ...


class Store(TaskRepo, RoutineRepo, Protocol):
    """Both collections behind one collaborator (local device storage or a remote backend)."""
