# src/routine_helper/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the store and clock into AppState,
- loads/saves the JSON snapshot of both collections (optional).
"""

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path

from ..config import get_settings
from ..core.clock import FixedClock, SystemClock
from ..core.errors import RoutineHelperError
from ..core.ids import ensure_unique_ids
from ..core.ports import Clock
from ..core.state import AppState
from ..storage.memory_store import InMemoryStore
from ..storage.snapshot import read_snapshot, write_snapshot

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.snapshot_path.parent.mkdir(parents=True, exist_ok=True)


def _build_clock(settings) -> Clock:
    override = getattr(settings, "today_override", None)
    if override:
        logger.info("Using fixed clock today=%s", override)
        return FixedClock(override)
    return SystemClock()


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    return AppState(
        settings=settings,
        store=InMemoryStore(),
        clock=_build_clock(settings),
    )


def load_snapshot(state: AppState) -> bool:
    """
    Fill the store from the snapshot file. Returns True if anything was loaded.

    All-or-nothing: both collections are parsed and checked before either one
    replaces the store contents. On failure the store is left untouched and
    state.snapshot_load_failed is set.
    """
    raw_path = getattr(state.settings, "snapshot_path", None)
    if not raw_path:
        return False
    path = Path(raw_path)
    if not path.exists():
        return False
    try:
        tasks, routines = read_snapshot(path)
        ensure_unique_ids(tasks, "task")
        ensure_unique_ids(routines, "routine")
    except (OSError, ValueError, RoutineHelperError):
        # ValueError covers json.JSONDecodeError.
        logger.exception("Failed to load snapshot from %s", path)
        state.snapshot_load_failed = True
        return False
    state.store.replace_tasks(tasks)
    state.store.replace_routines(routines)
    state.snapshot_load_failed = False
    logger.info("Loaded snapshot: %d tasks, %d routines from %s", len(tasks), len(routines), path)
    return True


def save_snapshot(state: AppState) -> bool:
    if not getattr(state.settings, "save_snapshot", False):
        return False
    raw_path = getattr(state.settings, "snapshot_path", None)
    if not raw_path:
        return False
    path = Path(raw_path)
    if state.snapshot_load_failed:
        logger.warning("Snapshot %s could not be loaded at startup; not overwriting it.", path)
        return False
    tasks = state.store.list_tasks()
    routines = state.store.list_routines()
    try:
        write_snapshot(path, tasks, routines)
        with contextlib.suppress(OSError):
            os.chmod(path, 0o600)
    except OSError:
        logger.exception("Failed to save snapshot to %s", path)
        return False
    logger.info("Saved snapshot: %d tasks, %d routines to %s", len(tasks), len(routines), path)
    return True
