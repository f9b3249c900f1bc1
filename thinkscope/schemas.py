"""Shared response envelopes.

Every endpoint answers ``{"success": true, "data": ...}`` (list endpoints add
``count``) and every failure ``{"success": false, "message": ..., "error": ...}``.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Envelope(CamelModel, Generic[T]):
    """Success envelope around a single payload."""

    success: bool = True
    data: T


class ListEnvelope(CamelModel, Generic[T]):
    """Success envelope around a list payload."""

    success: bool = True
    count: int
    data: list[T]

    @classmethod
    def of(cls, items: list[T]) -> "ListEnvelope[T]":
        """Wrap ``items`` and fill in ``count``."""
        return cls(count=len(items), data=items)


class ErrorEnvelope(CamelModel):
    """Failure envelope."""

    success: bool = False
    message: str
    error: str | None = None
