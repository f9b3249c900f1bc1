"""Schemas for progress API."""

from datetime import datetime
from uuid import UUID

from pydantic import StrictInt

from thinkscope.schemas import CamelModel


class ToggleRequest(CamelModel):
    """Body of the toggle endpoint; the id is validated by the router."""

    problem_id: str | None = None


class NumberedToggleRequest(CamelModel):
    """Body of the numeric toggle endpoint."""

    problem_id: StrictInt | None = None


class ToggleResponse(CamelModel):
    """State of a progress record after a toggle."""

    problem_id: UUID | int
    is_completed: bool
    completed_at: datetime | None = None


class AllProgressResponse(CamelModel):
    """Completed ids for building a local completion set."""

    completed_problems: list[str | int]
    total: int
    completed: int


class StatsResponse(CamelModel):
    """Overall statistics of the user."""

    completed: int
    attempted: int
    total: int
    percentage: int


class TopicProgressResponse(CamelModel):
    """Completion of a single topic."""

    topic_id: UUID
    completed: int
    total: int
    percentage: int
