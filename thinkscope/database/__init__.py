from .base import Base, TimestampMixin, create_all_tables
from .engine import engine
from .session import DbSession, async_session_maker, get_db_session


__all__ = [
    "Base",
    "DbSession",
    "TimestampMixin",
    "async_session_maker",
    "create_all_tables",
    "engine",
    "get_db_session",
]
