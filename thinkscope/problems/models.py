"""Problem models for database."""

import enum
from uuid import UUID, uuid4

from sqlalchemy import Enum, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from thinkscope.database.base import Base, TimestampMixin
from thinkscope.topics.models import Topic


class Difficulty(str, enum.Enum):
    """Difficulty tier of a problem."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class Problem(TimestampMixin, Base):
    """A single practice exercise owned by a topic."""

    __tablename__ = "problems"
    __table_args__ = (
        Index("ix_problems_topic_difficulty", "topic_id", "difficulty"),
        Index("ix_problems_topic_order", "topic_id", "order"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    topic_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    difficulty: Mapped[Difficulty] = mapped_column(
        Enum(Difficulty, native_enum=False, length=10, validate_strings=True), nullable=False
    )
    youtube_url: Mapped[str | None] = mapped_column(String(500))
    leetcode_url: Mapped[str | None] = mapped_column(String(500))
    article_url: Mapped[str | None] = mapped_column(String(500))
    description: Mapped[str | None] = mapped_column(Text)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    topic: Mapped[Topic] = relationship(lazy="joined")

    def __repr__(self) -> str:
        """Return string representation of the problem."""
        return f"<Problem(id={self.id}, title={self.title}, difficulty={self.difficulty})>"
