# src/routine_helper/core/ids.py

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

from .errors import ContractViolationError, NotFoundError

T = TypeVar("T")


def ensure_unique_ids(items: Iterable[Any], entity: str) -> None:
    seen: set[str] = set()
    for item in items:
        item_id = item.id
        if item_id in seen:
            raise ContractViolationError(f"duplicate {entity} id in collection: {item_id!r}")
        seen.add(item_id)


def index_of(items: Sequence[T], item_id: str, entity: str) -> int:
    for i, item in enumerate(items):
        if getattr(item, "id", None) == item_id:
            return i
    raise NotFoundError(entity, item_id)
