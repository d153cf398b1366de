# tests/test_matrix.py

from __future__ import annotations

import pytest

from routine_helper.core.errors import ContractViolationError, NotFoundError
from routine_helper.tasks.matrix import (
    QUADRANT_ANCHORS,
    apply_task_patch,
    classify,
    move_task,
    partition,
    reassign,
    toggle_task,
)
from routine_helper.tasks.task_models import Quadrant, SortDirection, SortKey, SortOption

from .fakes import make_task


@pytest.mark.parametrize(
    ("importance", "urgency", "expected"),
    [
        (51, 51, Quadrant.URGENT_IMPORTANT),
        (50, 51, Quadrant.URGENT_NOT_IMPORTANT),
        (51, 50, Quadrant.NOT_URGENT_IMPORTANT),
        (50, 50, Quadrant.NOT_URGENT_NOT_IMPORTANT),
        (100, 100, Quadrant.URGENT_IMPORTANT),
        (0, 0, Quadrant.NOT_URGENT_NOT_IMPORTANT),
    ],
)
def test_classify_boundary_is_strictly_above_fifty(importance, urgency, expected) -> None:
    assert classify(importance, urgency) is expected


def test_classify_clamps_out_of_range_scores() -> None:
    assert classify(150, -20) is Quadrant.NOT_URGENT_IMPORTANT
    assert classify(-1, 101) is Quadrant.URGENT_NOT_IMPORTANT


def test_classify_clamps_infinite_scores_to_the_bounds() -> None:
    assert classify(float("inf"), 0) is Quadrant.NOT_URGENT_IMPORTANT
    assert classify(float("-inf"), 10**400) is Quadrant.URGENT_NOT_IMPORTANT
    task = make_task("a", importance=1e309, urgency=float("-inf"))
    assert (task.importance, task.urgency) == (100, 0)


def test_classify_rejects_nan_and_non_numeric_scores() -> None:
    with pytest.raises(ContractViolationError):
        classify(float("nan"), 50)
    with pytest.raises(ContractViolationError):
        classify("high", 50)


def test_classify_is_total_over_the_score_square() -> None:
    seen = set()
    for importance in range(0, 101):
        for urgency in range(0, 101):
            seen.add(classify(importance, urgency))
    assert seen == set(Quadrant)


def test_task_scores_are_clamped_on_construction() -> None:
    task = make_task("a", importance=140, urgency=-3)
    assert (task.importance, task.urgency) == (100, 0)


def test_partition_buckets_are_disjoint_and_cover_open_tasks() -> None:
    tasks = [
        make_task("a", 90, 90),
        make_task("b", 10, 90),
        make_task("c", 90, 10),
        make_task("d", 10, 10),
        make_task("e", 50, 51),
        make_task("done", 90, 90, completed=True),
    ]
    buckets = partition(tasks)

    assert list(buckets) == list(Quadrant)
    ids = [t.id for bucket in buckets.values() for t in bucket]
    assert len(ids) == len(set(ids))
    assert set(ids) == {"a", "b", "c", "d", "e"}
    assert [t.id for t in buckets[Quadrant.URGENT_NOT_IMPORTANT]] == ["b", "e"]


def test_partition_default_sort_per_quadrant() -> None:
    tasks = [
        make_task("u1", 60, 70),
        make_task("u2", 90, 95),
        make_task("u3", 55, 95),
        make_task("n1", 70, 10),
        make_task("n2", 95, 40),
    ]
    buckets = partition(tasks)

    # Urgent quadrants: urgency desc, ties by importance desc.
    assert [t.id for t in buckets[Quadrant.URGENT_IMPORTANT]] == ["u2", "u3", "u1"]
    # Non-urgent quadrants: importance desc.
    assert [t.id for t in buckets[Quadrant.NOT_URGENT_IMPORTANT]] == ["n2", "n1"]


def test_partition_accepts_sort_overrides() -> None:
    tasks = [
        make_task("b", 90, 90, name="Beta"),
        make_task("a", 60, 60, name="alpha"),
    ]
    buckets = partition(tasks, {Quadrant.URGENT_IMPORTANT: "name-asc"})
    assert [t.id for t in buckets[Quadrant.URGENT_IMPORTANT]] == ["a", "b"]

    buckets = partition(
        tasks, {Quadrant.URGENT_IMPORTANT: SortOption(SortKey.URGENCY, SortDirection.ASC)}
    )
    assert [t.id for t in buckets[Quadrant.URGENT_IMPORTANT]] == ["a", "b"]


def test_partition_accepts_quadrant_aliases_as_sort_keys() -> None:
    tasks = [
        make_task("b", 90, 90, name="Beta"),
        make_task("a", 60, 60, name="alpha"),
    ]
    buckets = partition(tasks, {"q1": "name-asc"})
    assert [t.id for t in buckets[Quadrant.URGENT_IMPORTANT]] == ["a", "b"]

    with pytest.raises(ContractViolationError):
        partition(tasks, {"q9": "name-asc"})


def test_partition_rejects_duplicate_ids() -> None:
    with pytest.raises(ContractViolationError):
        partition([make_task("a"), make_task("a")])


def test_partition_empty_input_has_four_empty_buckets() -> None:
    assert partition([]) == {q: [] for q in Quadrant}


@pytest.mark.parametrize("quadrant", list(Quadrant))
def test_reassign_writes_anchor_scores_and_lands_in_target(quadrant) -> None:
    tasks = [make_task("a", 10, 10), make_task("b", 99, 99)]
    patch = reassign(tasks, "b", quadrant)

    importance, urgency = QUADRANT_ANCHORS[quadrant]
    assert patch.task_id == "b"
    assert patch.fields == {"importance": importance, "urgency": urgency}

    moved = apply_task_patch(tasks, patch)
    assert classify(moved[1].importance, moved[1].urgency) is quadrant


def test_reassign_is_idempotent() -> None:
    tasks = [make_task("a", 10, 90)]
    once = move_task(tasks, "a", Quadrant.NOT_URGENT_IMPORTANT)
    twice = move_task(once, "a", Quadrant.NOT_URGENT_IMPORTANT)
    assert (once[0].importance, once[0].urgency) == (75, 25)
    assert once == twice


def test_reassign_unknown_id_is_not_found_and_input_untouched() -> None:
    tasks = [make_task("a", 10, 90)]
    with pytest.raises(NotFoundError) as exc:
        reassign(tasks, "missing", Quadrant.URGENT_IMPORTANT)
    assert exc.value.entity_id == "missing"
    assert (tasks[0].importance, tasks[0].urgency) == (10, 90)


def test_reassign_accepts_quadrant_names_and_aliases() -> None:
    tasks = [make_task("a")]
    assert reassign(tasks, "a", "q1").fields == {"importance": 75, "urgency": 75}
    assert reassign(tasks, "a", "not-urgent-important").fields == {"importance": 75, "urgency": 25}
    with pytest.raises(ContractViolationError):
        reassign(tasks, "a", "q9")


def test_toggle_task_flips_completed() -> None:
    tasks = [make_task("a")]
    patch = toggle_task(tasks, "a")
    assert patch.fields == {"completed": True}

    done = apply_task_patch(tasks, patch)
    assert done[0].completed is True
    assert tasks[0].completed is False
    assert partition(done) == {q: [] for q in Quadrant}


def test_apply_task_patch_clamps_scores() -> None:
    from routine_helper.tasks.task_models import TaskPatch

    out = apply_task_patch([make_task("a")], TaskPatch("a", {"importance": 300}))
    assert out[0].importance == 100


def test_task_patch_rejects_immutable_fields() -> None:
    from routine_helper.tasks.task_models import TaskPatch

    with pytest.raises(ContractViolationError):
        TaskPatch("a", {"id": "b"})
    with pytest.raises(ContractViolationError):
        TaskPatch("a", {"created_at": None})
