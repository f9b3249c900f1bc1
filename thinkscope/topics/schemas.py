"""Schemas for topic API."""

from uuid import UUID

from thinkscope.progress.aggregator import TopicWithProgress
from thinkscope.schemas import CamelModel


class TopicSummary(CamelModel):
    """Id and title of a topic, embedded in problem details."""

    id: UUID
    title: str


class TopicResponse(CamelModel):
    """A topic together with the user's completion of it."""

    id: UUID
    title: str
    description: str | None = None
    icon: str
    order: int
    total_problems: int
    completed_problems: int
    progress: int

    @classmethod
    def from_progress(cls, item: TopicWithProgress) -> "TopicResponse":
        """Build the response from an aggregated topic."""
        return cls(
            id=item.topic.id,
            title=item.topic.title,
            description=item.topic.description,
            icon=item.topic.icon,
            order=item.topic.order,
            total_problems=item.total_problems,
            completed_problems=item.completed_problems,
            progress=item.progress,
        )
