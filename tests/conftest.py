# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from routine_helper.core.clock import FixedClock
from routine_helper.core.state import AppState
from routine_helper.storage.memory_store import InMemoryStore

from .fakes import TODAY, SequentialIds, TickingNow


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI layer.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="routine-helper-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path,
        snapshot_path=tmp_path / "snapshot.json",
        save_snapshot=True,
        default_target_days=30,
        today_override=TODAY,
    )


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore(now=TickingNow(), id_factory=SequentialIds())


@pytest.fixture()
def state(settings: SimpleNamespace, store: InMemoryStore) -> AppState:
    """AppState wired with a deterministic store and a clock pinned to TODAY."""
    return AppState(settings=settings, store=store, clock=FixedClock(TODAY))
