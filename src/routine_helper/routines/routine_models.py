# src/routine_helper/routines/routine_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..core.dates import normalize_days
from ..core.errors import ContractViolationError, InvalidTargetError

DEFAULT_TARGET_DAYS = 30

# Suggested labels for the add-routine form; any text is accepted as a category.
CATEGORIES = ("Health", "Exercise", "Study", "Reading", "Meditation", "Hobby", "Work", "Other")

COLORS = (
    "#3B82F6",  # blue
    "#10B981",  # emerald
    "#F59E0B",  # amber
    "#EF4444",  # red
    "#8B5CF6",  # violet
    "#06B6D4",  # cyan
    "#84CC16",  # lime
    "#F97316",  # orange
)


def validate_target_days(target_days: Any) -> int:
    if isinstance(target_days, bool) or not isinstance(target_days, int) or target_days < 1:
        raise InvalidTargetError(target_days)
    return target_days


@dataclass(slots=True, frozen=True)
class Routine:
    """
    A recurring habit goal.

    completed_dates holds canonical YYYY-MM-DD strings; duplicates collapse
    and any malformed entry is rejected at construction time.
    """

    id: str
    name: str
    category: str
    target_days: int
    created_at: datetime

    description: str = ""
    color: str = COLORS[0]
    completed_dates: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.id:
            raise ContractViolationError("routine id is required")
        if not self.name or not self.name.strip():
            raise ContractViolationError(f"routine name is required (id={self.id!r})")
        validate_target_days(self.target_days)
        object.__setattr__(self, "completed_dates", normalize_days(self.completed_dates or ()))

    @property
    def completed_count(self) -> int:
        return len(self.completed_dates)


ROUTINE_PATCH_FIELDS = frozenset(
    {"name", "description", "category", "target_days", "color", "completed_dates"}
)


@dataclass(slots=True, frozen=True)
class RoutinePatch:
    routine_id: str
    fields: dict[str, Any]

    def __post_init__(self) -> None:
        unknown = set(self.fields) - ROUTINE_PATCH_FIELDS
        if unknown:
            raise ContractViolationError(f"routine fields are not patchable: {sorted(unknown)}")
