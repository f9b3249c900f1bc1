from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Timezone-aware current time used for model defaults."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all database models."""


class TimestampMixin:
    """Python-side created/updated timestamps.

    Defaults are computed in Python so freshly flushed rows never need a
    refresh round trip (lazy loads are not allowed on async sessions).
    """

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


async def create_all_tables() -> None:
    """Create all tables in the database."""
    from .engine import engine

    # Register every model on the metadata before creating
    import thinkscope.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
