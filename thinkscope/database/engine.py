from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from thinkscope.config.settings import get_settings


settings = get_settings()


def engine_options(database_url: str) -> dict[str, Any]:
    """Pool settings for the kind of database behind ``database_url``.

    - Supabase/pgbouncer pooler: small pool so we don't hog sessions.
    - Direct Postgres: standard pool with pre-ping.
    - SQLite (local runs and tests): writers wait on the file lock instead of failing.
    """
    if database_url.startswith("sqlite"):
        return {"connect_args": {"timeout": 30}}

    using_pooler = ".supabase." in database_url or ".pooler." in database_url

    if using_pooler:
        return {
            "pool_size": 3,
            "max_overflow": 2,
            "pool_recycle": 1800,  # ~30m
            "pool_pre_ping": True,
            "pool_use_lifo": True,
            "connect_args": {"connect_timeout": 10, "prepare_threshold": None},
        }

    return {
        "pool_size": 10,
        "max_overflow": 10,
        "pool_recycle": 3600,  # ~1h
        "pool_pre_ping": True,
        "pool_use_lifo": True,
        "connect_args": {"connect_timeout": 10},
    }


def create_app_engine(database_url: str | None = None) -> AsyncEngine:
    """Create the async engine for the configured database."""
    database_url = database_url or settings.DATABASE_URL
    return create_async_engine(
        database_url,
        echo=False,  # Set True for SQL debugging
        **engine_options(database_url),
    )


# Create the engine
engine: AsyncEngine = create_app_engine()
