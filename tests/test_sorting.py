# tests/test_sorting.py

from __future__ import annotations

from datetime import date

import pytest

from routine_helper.core.errors import ContractViolationError
from routine_helper.tasks.matrix import sort_tasks
from routine_helper.tasks.task_models import SortDirection, SortKey, SortOption

from .fakes import make_task


def _ids(tasks) -> list[str]:
    return [t.id for t in tasks]


def test_importance_desc_breaks_ties_by_urgency_desc() -> None:
    tasks = [make_task("low_urg", 80, 30), make_task("high_urg", 80, 90)]
    assert _ids(sort_tasks(tasks, SortKey.IMPORTANCE, SortDirection.DESC)) == ["high_urg", "low_urg"]


def test_tie_break_ignores_primary_direction() -> None:
    tasks = [
        make_task("a", 80, 30),
        make_task("b", 20, 10),
        make_task("c", 80, 90),
    ]
    assert _ids(sort_tasks(tasks, "importance-asc")) == ["b", "c", "a"]
    assert _ids(sort_tasks(tasks, "importance-desc")) == ["c", "a", "b"]


def test_urgency_breaks_ties_by_importance_desc() -> None:
    tasks = [make_task("a", 10, 70), make_task("b", 60, 70), make_task("c", 30, 20)]
    assert _ids(sort_tasks(tasks, "urgency-desc")) == ["b", "a", "c"]
    assert _ids(sort_tasks(tasks, "urgency-asc")) == ["c", "b", "a"]


def test_name_sort_is_case_insensitive_and_stable() -> None:
    tasks = [
        make_task("1", 10, 10, name="beta"),
        make_task("2", 90, 90, name="Alpha"),
        make_task("3", 50, 50, name="alpha"),
    ]
    # No secondary key for names: equal names keep input order.
    assert _ids(sort_tasks(tasks, "name-asc")) == ["2", "3", "1"]


def test_created_sort_defaults_to_newest_first_and_keeps_ties_in_input_order() -> None:
    tasks = [
        make_task("old", created_minutes=0),
        make_task("new", created_minutes=10),
        make_task("same_a", 10, 10, created_minutes=5),
        make_task("same_b", 90, 90, created_minutes=5),
    ]
    assert _ids(sort_tasks(tasks, SortKey.CREATED_AT)) == ["new", "same_a", "same_b", "old"]


@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_tasks_without_due_date_sort_last_in_either_direction(direction) -> None:
    tasks = [
        make_task("none1"),
        make_task("jan", due=date(2024, 1, 10)),
        make_task("none2"),
        make_task("feb", due=date(2024, 2, 1)),
    ]
    out = _ids(sort_tasks(tasks, SortKey.DUE_DATE, direction))
    assert out[2:] == ["none1", "none2"]
    expected = ["jan", "feb"] if direction == "asc" else ["feb", "jan"]
    assert out[:2] == expected


def test_due_date_defaults_to_ascending_with_importance_tie_break() -> None:
    day = date(2024, 3, 1)
    tasks = [make_task("minor", 20, 50, due=day), make_task("major", 90, 50, due=day)]
    assert _ids(sort_tasks(tasks, "due")) == ["major", "minor"]


def test_sort_is_non_destructive() -> None:
    tasks = [make_task("a", 10, 10), make_task("b", 90, 90)]
    snapshot = list(tasks)
    out = sort_tasks(tasks, "importance-desc")
    assert tasks == snapshot
    assert out is not tasks
    # Restartable: the same call yields the same order.
    assert sort_tasks(tasks, "importance-desc") == out


def test_sort_option_parsing() -> None:
    assert SortOption.parse("created-desc") == SortOption(SortKey.CREATED_AT, SortDirection.DESC)
    assert SortOption.parse("name") == SortOption(SortKey.NAME, SortDirection.ASC)
    assert SortOption.parse("importance").direction is SortDirection.DESC
    assert SortOption.parse("urgency-asc").label == "urgency-asc"

    with pytest.raises(ContractViolationError):
        SortOption.parse("colour-desc")
    with pytest.raises(ContractViolationError):
        SortOption.parse("name-sideways")


def test_sort_option_accepts_record_field_spellings() -> None:
    assert SortOption.parse("dueDate-asc") == SortOption(SortKey.DUE_DATE, SortDirection.ASC)
    assert SortOption.parse("createdAt") == SortOption(SortKey.CREATED_AT, SortDirection.DESC)
    assert SortOption.parse("Name-ASC") == SortOption(SortKey.NAME, SortDirection.ASC)


def test_sort_tasks_direction_is_case_insensitive() -> None:
    tasks = [make_task("low", 20, 10), make_task("high", 90, 10)]
    assert _ids(sort_tasks(tasks, SortKey.IMPORTANCE, "DESC")) == ["high", "low"]
    assert _ids(sort_tasks(tasks, "importance", "Asc")) == ["low", "high"]
    with pytest.raises(ContractViolationError):
        sort_tasks(tasks, SortKey.IMPORTANCE, "down")
