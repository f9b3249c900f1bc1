"""Read-only progress views.

Counts are always computed from the progress and problems tables; nothing
here writes. Each topic's numbers come from their own grouped count, so a
toggle landing mid-request can leave one topic fresher than another.
"""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from thinkscope.config.settings import get_settings
from thinkscope.problems.models import Problem
from thinkscope.progress.models import NumberedProgress, Progress
from thinkscope.topics.models import Topic


def completion_percentage(completed: int, total: int) -> int:
    """Whole percentage of ``completed`` over ``total``, rounded half up.

    Returns 0 when ``total`` is 0. Integer arithmetic keeps ``.5`` cases exact
    (1/8 -> 13, not the 12 that ``round()`` would give).
    """
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


@dataclass(frozen=True)
class TopicProgress:
    topic_id: UUID
    completed: int
    total: int
    percentage: int


@dataclass(frozen=True)
class TopicWithProgress:
    topic: Topic
    total_problems: int
    completed_problems: int
    progress: int


@dataclass(frozen=True)
class ProgressSnapshot:
    """Everything a client needs to rebuild its local completion set."""

    completed_problems: list[str | int]
    total: int
    completed: int


@dataclass(frozen=True)
class OverallStats:
    completed: int
    attempted: int
    total: int
    percentage: int


class ProgressAggregator:
    """Computes completion views for one user at a time."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def is_problem_completed(self, user_id: UUID, problem_id: UUID) -> bool:
        """Whether the user completed the problem; no record means False."""
        result = await self.session.execute(
            select(Progress.is_completed).where(Progress.user_id == user_id, Progress.problem_id == problem_id)
        )
        return bool(result.scalar_one_or_none())

    async def completed_problem_ids(self, user_id: UUID) -> set[UUID | int]:
        """Ids of every completed problem, canonical and numbered."""
        canonical = await self.session.scalars(
            select(Progress.problem_id).where(Progress.user_id == user_id, Progress.is_completed.is_(True))
        )
        numbered = await self.session.scalars(
            select(NumberedProgress.problem_number).where(
                NumberedProgress.user_id == user_id, NumberedProgress.is_completed.is_(True)
            )
        )
        return set(canonical.all()) | set(numbered.all())

    async def all_progress(self, user_id: UUID) -> ProgressSnapshot:
        """Completed ids plus the count of all progress records of the user."""
        completed = await self.completed_problem_ids(user_id)

        total = 0
        for model in (Progress, NumberedProgress):
            total += await self.session.scalar(select(func.count(model.id)).where(model.user_id == user_id)) or 0

        completed_ids: list[str | int] = sorted(str(pid) for pid in completed if isinstance(pid, UUID))
        completed_ids.extend(sorted(pid for pid in completed if isinstance(pid, int)))

        return ProgressSnapshot(completed_problems=completed_ids, total=total, completed=len(completed_ids))

    async def topic_progress(self, user_id: UUID, topic_id: UUID) -> TopicProgress:
        """Completed vs. total problems of one topic.

        An unknown topic simply has no problems and reports zeros.
        """
        total = await self.session.scalar(select(func.count(Problem.id)).where(Problem.topic_id == topic_id)) or 0

        completed = (
            await self.session.scalar(
                select(func.count(Progress.id))
                .join(Problem, Problem.id == Progress.problem_id)
                .where(
                    Progress.user_id == user_id,
                    Progress.is_completed.is_(True),
                    Problem.topic_id == topic_id,
                )
            )
            or 0
        )

        return TopicProgress(
            topic_id=topic_id,
            completed=completed,
            total=total,
            percentage=completion_percentage(completed, total),
        )

    async def topics_with_progress(self, user_id: UUID) -> list[TopicWithProgress]:
        """Every topic in display order with its own completion numbers."""
        topics = (await self.session.scalars(select(Topic).order_by(Topic.order, Topic.title))).all()
        if not topics:
            return []

        totals_result = await self.session.execute(
            select(Problem.topic_id, func.count(Problem.id)).group_by(Problem.topic_id)
        )
        totals = {topic_id: count for topic_id, count in totals_result.all()}

        completed_result = await self.session.execute(
            select(Problem.topic_id, func.count(Progress.id))
            .join(Problem, Problem.id == Progress.problem_id)
            .where(Progress.user_id == user_id, Progress.is_completed.is_(True))
            .group_by(Problem.topic_id)
        )
        completed = {topic_id: count for topic_id, count in completed_result.all()}

        items = []
        for topic in topics:
            total_problems = totals.get(topic.id, 0)
            completed_problems = completed.get(topic.id, 0)
            items.append(
                TopicWithProgress(
                    topic=topic,
                    total_problems=total_problems,
                    completed_problems=completed_problems,
                    progress=completion_percentage(completed_problems, total_problems),
                )
            )
        return items

    async def overall_stats(self, user_id: UUID) -> OverallStats:
        """Completed and attempted counts across every progress record.

        ``attempted`` includes records toggled back to incomplete, and
        ``total`` is the configured catalog size rather than a live count.
        """
        completed = 0
        attempted = 0
        for model in (Progress, NumberedProgress):
            result = await self.session.execute(
                select(model.is_completed, func.count(model.id))
                .where(model.user_id == user_id)
                .group_by(model.is_completed)
            )
            for is_completed, count in result.all():
                attempted += count
                if is_completed:
                    completed += count

        return OverallStats(
            completed=completed,
            attempted=attempted,
            total=get_settings().PROGRESS_CATALOG_TOTAL,
            percentage=completion_percentage(completed, attempted),
        )
