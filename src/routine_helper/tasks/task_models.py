# src/routine_helper/tasks/task_models.py

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from ..core.errors import ContractViolationError

SCORE_MIN = 0
SCORE_MAX = 100
DEFAULT_SCORE = 50


def clamp_score(value: Any) -> int:
    """Clamp an importance/urgency score into [0, 100]. Infinities land on the bounds."""
    if isinstance(value, int) and not isinstance(value, bool):
        return max(SCORE_MIN, min(SCORE_MAX, value))
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise ContractViolationError(f"score must be numeric, got {value!r}") from e
    if math.isnan(v):
        raise ContractViolationError("score must not be NaN")
    return int(round(max(SCORE_MIN, min(SCORE_MAX, v))))


class Quadrant(StrEnum):
    """
    Eisenhower quadrant.

    Values double as the wire names used by the presentation layer
    (sort settings, move commands).
    """

    URGENT_IMPORTANT = "urgent_important"
    URGENT_NOT_IMPORTANT = "urgent_not_important"
    NOT_URGENT_IMPORTANT = "not_urgent_important"
    NOT_URGENT_NOT_IMPORTANT = "not_urgent_not_important"

    @classmethod
    def parse(cls, raw: str) -> Quadrant:
        key = (raw or "").strip().lower().replace("-", "_")
        aliases = {
            "q1": cls.URGENT_IMPORTANT,
            "do": cls.URGENT_IMPORTANT,
            "q2": cls.NOT_URGENT_IMPORTANT,
            "schedule": cls.NOT_URGENT_IMPORTANT,
            "q3": cls.URGENT_NOT_IMPORTANT,
            "delegate": cls.URGENT_NOT_IMPORTANT,
            "q4": cls.NOT_URGENT_NOT_IMPORTANT,
            "eliminate": cls.NOT_URGENT_NOT_IMPORTANT,
        }
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError as e:
            raise ContractViolationError(f"unknown quadrant: {raw!r}") from e


class SortKey(StrEnum):
    DUE_DATE = "due"
    IMPORTANCE = "importance"
    URGENCY = "urgency"
    CREATED_AT = "created"
    NAME = "name"

    @classmethod
    def parse(cls, raw: str) -> SortKey:
        """Accept "due"/"created" and the record field spellings "dueDate"/"createdAt"."""
        key = (raw or "").strip().lower().replace("_", "")
        aliases = {"duedate": cls.DUE_DATE, "createdat": cls.CREATED_AT}
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError as e:
            raise ContractViolationError(f"unknown sort key: {raw!r}") from e


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, raw: str) -> SortDirection:
        try:
            return cls((raw or "").strip().lower())
        except ValueError as e:
            raise ContractViolationError(f"unknown sort direction: {raw!r}") from e


DEFAULT_DIRECTIONS: dict[SortKey, SortDirection] = {
    SortKey.DUE_DATE: SortDirection.ASC,
    SortKey.IMPORTANCE: SortDirection.DESC,
    SortKey.URGENCY: SortDirection.DESC,
    SortKey.CREATED_AT: SortDirection.DESC,
    SortKey.NAME: SortDirection.ASC,
}


@dataclass(slots=True, frozen=True)
class SortOption:
    key: SortKey
    direction: SortDirection

    @property
    def label(self) -> str:
        return f"{self.key.value}-{self.direction.value}"

    @classmethod
    def parse(cls, raw: str) -> SortOption:
        """
        Parse "urgency-desc" / "name-asc" / "dueDate-asc" / "importance".

        A bare key takes its default direction.
        """
        text = (raw or "").strip()
        key_raw, sep, dir_raw = text.rpartition("-")
        if not sep:
            key_raw, dir_raw = text, ""
        try:
            key = SortKey.parse(key_raw)
        except ContractViolationError as e:
            raise ContractViolationError(f"unknown sort option: {raw!r}") from e
        if not dir_raw:
            return cls(key, DEFAULT_DIRECTIONS[key])
        return cls(key, SortDirection.parse(dir_raw))


@dataclass(slots=True, frozen=True)
class Task:
    id: str
    name: str
    importance: int
    urgency: int
    created_at: datetime

    description: str = ""
    completed: bool = False
    due_date: date | None = None
    tags: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.id:
            raise ContractViolationError("task id is required")
        if not self.name or not self.name.strip():
            raise ContractViolationError(f"task name is required (id={self.id!r})")
        # Frozen dataclass: normalize through object.__setattr__.
        object.__setattr__(self, "importance", clamp_score(self.importance))
        object.__setattr__(self, "urgency", clamp_score(self.urgency))
        object.__setattr__(self, "tags", frozenset(self.tags or ()))


TASK_PATCH_FIELDS = frozenset(
    {"name", "description", "importance", "urgency", "completed", "due_date", "tags"}
)


@dataclass(slots=True, frozen=True)
class TaskPatch:
    """Single-entity update handed back to the store: {id, fieldUpdates}."""

    task_id: str
    fields: dict[str, Any]

    def __post_init__(self) -> None:
        unknown = set(self.fields) - TASK_PATCH_FIELDS
        if unknown:
            raise ContractViolationError(f"task fields are not patchable: {sorted(unknown)}")
