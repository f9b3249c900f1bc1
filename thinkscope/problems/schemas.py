"""Schemas for problem API."""

from datetime import datetime
from uuid import UUID

from thinkscope.problems.models import Difficulty, Problem
from thinkscope.schemas import CamelModel
from thinkscope.topics.schemas import TopicSummary


class ProblemLinks(CamelModel):
    """External resources for a problem."""

    youtube: str | None = None
    leetcode: str | None = None
    article: str | None = None


class ProblemResponse(CamelModel):
    """A problem with the user's completion status."""

    id: UUID
    topic_id: UUID
    title: str
    difficulty: Difficulty
    links: ProblemLinks
    description: str | None = None
    order: int
    created_at: datetime
    updated_at: datetime
    is_completed: bool

    @classmethod
    def from_problem(cls, problem: Problem, is_completed: bool) -> "ProblemResponse":
        """Build the response from a problem row."""
        return cls(**cls._fields(problem), is_completed=is_completed)

    @staticmethod
    def _fields(problem: Problem) -> dict:
        return {
            "id": problem.id,
            "topic_id": problem.topic_id,
            "title": problem.title,
            "difficulty": problem.difficulty,
            "links": ProblemLinks(
                youtube=problem.youtube_url,
                leetcode=problem.leetcode_url,
                article=problem.article_url,
            ),
            "description": problem.description,
            "order": problem.order,
            "created_at": problem.created_at,
            "updated_at": problem.updated_at,
        }


class ProblemDetailResponse(ProblemResponse):
    """A single problem, with its topic."""

    topic: TopicSummary

    @classmethod
    def from_problem(cls, problem: Problem, is_completed: bool) -> "ProblemDetailResponse":
        """Build the response from a problem row and its loaded topic."""
        return cls(
            **cls._fields(problem),
            topic=TopicSummary(id=problem.topic.id, title=problem.topic.title),
            is_completed=is_completed,
        )
