# src/routine_helper/__init__.py

"""Priority matrix and routine progress engines for a personal productivity tracker."""

from __future__ import annotations

from .routines.progress import streak, today_progress, toggle_completion
from .routines.stats import aggregate
from .tasks.matrix import classify, partition, reassign, sort_tasks

__version__ = "0.1.0"

__all__ = [
    "aggregate",
    "classify",
    "partition",
    "reassign",
    "sort_tasks",
    "streak",
    "today_progress",
    "toggle_completion",
]
