"""Topic models for database."""

from uuid import UUID, uuid4

from sqlalchemy import Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from thinkscope.database.base import Base, TimestampMixin


class Topic(TimestampMixin, Base):
    """A named category of practice problems.

    Problem counts are never stored here; they are computed by the progress
    aggregator from the problems table.
    """

    __tablename__ = "topics"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    icon: Mapped[str] = mapped_column(String(16), nullable=False, default="📚")
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)

    def __repr__(self) -> str:
        """Return string representation of the topic."""
        return f"<Topic(id={self.id}, title={self.title})>"
