"""Identifier parsing shared by the routers."""

from typing import Any
from uuid import UUID

from thinkscope.exceptions import ValidationError


def validate_uuid(value: Any, field: str, label: str) -> UUID:
    """Parse ``value`` as a canonical identifier or raise ``ValidationError``.

    ``label`` is the human name used in the message, e.g. ``"topic"`` gives
    ``"Invalid topic ID"``.
    """
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str) or not value:
        msg = f"Valid {label} ID is required"
        raise ValidationError(msg, field=field)
    try:
        return UUID(value)
    except ValueError as e:
        msg = f"Invalid {label} ID"
        raise ValidationError(msg, field=field) from e


# Largest value a 32-bit INTEGER column holds on every supported database
MAX_PROBLEM_NUMBER = 2**31 - 1


def validate_problem_number(value: Any, field: str = "problemId") -> int:
    """Accept only positive integers that fit the problem number column (booleans are rejected)."""
    if isinstance(value, bool) or not isinstance(value, int) or not 0 < value <= MAX_PROBLEM_NUMBER:
        msg = "Valid numeric problem ID is required"
        raise ValidationError(msg, field=field)
    return value
