# src/routine_helper/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_models import Quadrant, SortOption
from .ports import Clock, Store


@dataclass
class AppState:
    # Settings object (config.Settings or a test SimpleNamespace).
    settings: Any

    store: Store
    clock: Clock

    # Per-quadrant sort chosen in the matrix view; missing entries use the engine defaults.
    sort_options: dict[Quadrant, SortOption] = field(default_factory=dict)

    # Set when the snapshot file exists but could not be read; saving is then skipped
    # so the file on disk is not overwritten with an empty store.
    snapshot_load_failed: bool = False
