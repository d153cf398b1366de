# src/routine_helper/core/errors.py

from __future__ import annotations

"""
Error taxonomy shared by the engines and the store.

Out-of-range importance/urgency is NOT an error: scores are clamped
(see tasks.task_models.clamp_score) so classification stays total.
"""


class RoutineHelperError(Exception):
    """Base class for every error raised by routine_helper."""


class NotFoundError(RoutineHelperError, LookupError):
    """An operation referenced an id that is absent from the supplied collection."""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: id={entity_id!r}")


class InvalidTargetError(RoutineHelperError, ValueError):
    """Routine target_days is not a positive integer."""

    def __init__(self, target_days: object) -> None:
        self.target_days = target_days
        super().__init__(f"target_days must be a positive integer, got {target_days!r}")


class ContractViolationError(RoutineHelperError, ValueError):
    """Malformed input: duplicate ids, non-canonical dates, unknown options, empty names."""
