"""Business logic for toggling problem completion."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import DateTime, Row, case, insert, literal, not_, null, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from thinkscope.exceptions import ProgressConflictError, ResourceNotFoundError
from thinkscope.problems.models import Problem
from thinkscope.progress.models import NumberedProgress, Progress


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleResult:
    problem_id: UUID | int
    is_completed: bool
    completed_at: datetime | None


class ProgressService:
    """The only writer of progress records.

    A toggle is one atomic UPDATE that flips the flag in place; the first
    toggle of a pair INSERTs a completed record instead. Two first toggles
    racing on the same pair cannot both insert: the unique constraint rejects
    the second one, which surfaces as ``ProgressConflictError``.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize progress service."""
        self.session = session

    async def toggle(self, user_id: UUID, problem_id: UUID) -> ToggleResult:
        """Flip completion of a catalog problem, creating it as completed."""
        exists = await self.session.scalar(select(Problem.id).where(Problem.id == problem_id))
        if exists is None:
            raise ResourceNotFoundError("Problem", str(problem_id))

        return await self._toggle(Progress, Progress.problem_id, user_id, problem_id)

    async def toggle_number(self, user_id: UUID, problem_number: int) -> ToggleResult:
        """Flip completion of a problem addressed by its integer id."""
        return await self._toggle(NumberedProgress, NumberedProgress.problem_number, user_id, problem_number)

    async def _toggle(
        self,
        model: type[Progress] | type[NumberedProgress],
        key_column: InstrumentedAttribute,
        user_id: UUID,
        key: Any,
    ) -> ToggleResult:
        now = datetime.now(UTC)

        try:
            row = await self._flip(model, key_column, user_id, key, now)
            if row is None:
                row = await self._create(model, key_column, user_id, key, now)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning("Concurrent first toggle for user %s, problem %s", user_id, key)
            raise ProgressConflictError(key) from e

        result = ToggleResult(problem_id=row[0], is_completed=row[1], completed_at=row[2])
        logger.info(
            "Toggled progress for user %s, problem %s: completed=%s", user_id, result.problem_id, result.is_completed
        )
        return result

    async def _flip(self, model, key_column, user_id: UUID, key: Any, now: datetime) -> Row | None:
        """Invert an existing record in place; None when there is no record yet."""
        # completed_at follows the new value: stamped when turning on, cleared when turning off
        flip = (
            update(model)
            .where(model.user_id == user_id, key_column == key)
            .values(
                is_completed=not_(model.is_completed),
                completed_at=case((model.is_completed, null()), else_=literal(now, DateTime(timezone=True))),
                updated_at=now,
            )
            .returning(key_column, model.is_completed, model.completed_at)
            .execution_options(synchronize_session=False)
        )
        return (await self.session.execute(flip)).first()

    async def _create(self, model, key_column, user_id: UUID, key: Any, now: datetime) -> Row:
        """Insert the first record of a pair, already completed."""
        create = (
            insert(model)
            .values({"user_id": user_id, key_column.key: key, "is_completed": True, "completed_at": now})
            .returning(key_column, model.is_completed, model.completed_at)
        )
        return (await self.session.execute(create)).one()
