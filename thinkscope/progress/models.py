"""Progress models for tracking problem completion."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from thinkscope.database.base import Base, TimestampMixin


class Progress(TimestampMixin, Base):
    """Completion state of one problem for one user.

    At most one row exists per (user, problem); toggles mutate it in place.
    """

    __tablename__ = "progress"
    __table_args__ = (
        UniqueConstraint("user_id", "problem_id", name="uq_progress_user_problem"),
        Index("ix_progress_user_completed", "user_id", "is_completed"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    problem_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("problems.id", ondelete="CASCADE"), nullable=False, index=True
    )
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Set when is_completed becomes true, cleared when it becomes false
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    notes: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        """Return string representation of the progress."""
        return f"<Progress(user_id={self.user_id}, problem_id={self.problem_id}, is_completed={self.is_completed})>"


class NumberedProgress(TimestampMixin, Base):
    """Completion state for catalogs addressed by small integer problem ids."""

    __tablename__ = "numbered_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "problem_number", name="uq_numbered_progress_user_problem"),
        Index("ix_numbered_progress_user_completed", "user_id", "is_completed"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    problem_number: Mapped[int] = mapped_column(Integer, nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    notes: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        """Return string representation of the progress."""
        return (
            f"<NumberedProgress(user_id={self.user_id}, problem_number={self.problem_number}, "
            f"is_completed={self.is_completed})>"
        )
