# src/routine_helper/core/dates.py

from __future__ import annotations

from datetime import date, datetime

from .errors import ContractViolationError

DAY_FORMAT = "%Y-%m-%d"


def parse_day(raw: str | date) -> date:
    """
    Parse a canonical calendar-date string (YYYY-MM-DD).

    `date` objects pass through; datetimes are rejected because a timestamp
    is not a calendar day.
    """
    if isinstance(raw, datetime):
        raise ContractViolationError(f"expected a calendar date, got datetime {raw!r}")
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise ContractViolationError(f"expected YYYY-MM-DD string, got {type(raw).__name__}")
    try:
        parsed = datetime.strptime(raw, DAY_FORMAT).date()
    except ValueError as e:
        raise ContractViolationError(f"invalid calendar date: {raw!r}") from e
    # strptime accepts "2024-1-5"; only the zero-padded form is canonical.
    if parsed.strftime(DAY_FORMAT) != raw:
        raise ContractViolationError(f"non-canonical calendar date: {raw!r}")
    return parsed


def format_day(d: date) -> str:
    return d.strftime(DAY_FORMAT)


def normalize_days(raw_days) -> frozenset[str]:
    """Validate an iterable of day strings and return them as a frozenset of canonical strings."""
    out: set[str] = set()
    for raw in raw_days:
        out.add(format_day(parse_day(raw)))
    return frozenset(out)
