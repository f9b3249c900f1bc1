"""Problem listing with per-user completion status."""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from thinkscope.exceptions import ResourceNotFoundError
from thinkscope.problems.models import Problem
from thinkscope.progress.aggregator import ProgressAggregator
from thinkscope.progress.models import Progress


@dataclass(frozen=True)
class ProblemStatus:
    problem: Problem
    is_completed: bool


class ProblemService:
    """Reads problems joined to the user's progress in a single query."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _with_status(self, user_id: UUID):
        return select(Problem, Progress.is_completed).outerjoin(
            Progress, and_(Progress.problem_id == Problem.id, Progress.user_id == user_id)
        )

    async def list_problems(self, user_id: UUID, topic_id: UUID) -> list[ProblemStatus]:
        """Problems of a topic ordered for display; unknown topics give []."""
        result = await self.session.execute(
            self._with_status(user_id)
            .where(Problem.topic_id == topic_id)
            .order_by(Problem.order, Problem.created_at)
        )
        return [ProblemStatus(problem=problem, is_completed=bool(done)) for problem, done in result.all()]

    async def get_problem(self, user_id: UUID, problem_id: UUID) -> ProblemStatus:
        """A single problem with its topic loaded."""
        problem = await self.session.get(Problem, problem_id)
        if problem is None:
            raise ResourceNotFoundError("Problem", str(problem_id))
        is_completed = await ProgressAggregator(self.session).is_problem_completed(user_id, problem_id)
        return ProblemStatus(problem=problem, is_completed=is_completed)
