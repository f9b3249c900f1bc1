"""Shared fixtures.

Every test gets its own SQLite database file, so tests never see each
other's rows. The app under test is the real FastAPI app with only the
database session dependency overridden.
"""

import os
import tempfile
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path

# Configure the app before anything imports thinkscope
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["AUTH_SECRET_KEY"] = "test-secret-key-for-thinkscope"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / 'thinkscope-default.db'}"

import httpx
import pytest
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import thinkscope.models  # noqa: F401
from thinkscope.auth.security import create_access_token, get_password_hash
from thinkscope.client import ThinkscopeClient
from thinkscope.database.base import Base
from thinkscope.database.session import get_db_session
from thinkscope.main import create_app
from thinkscope.problems.models import Difficulty, Problem
from thinkscope.topics.models import Topic
from thinkscope.users.models import User


TEST_PASSWORD = "correct-horse"  # noqa: S105


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Fresh database per test; one connection per session so writers really race."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'thinkscope.db'}",
        poolclass=NullPool,
        connect_args={"timeout": 30},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory) -> FastAPI:
    application = create_app()

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def make_user(session_factory) -> Callable[..., Awaitable[User]]:
    """Insert a user directly, bypassing signup."""

    async def _make_user(email: str = "ada@example.com", name: str = "Ada") -> User:
        async with session_factory() as session:
            user = User(name=name, email=email, password_hash=get_password_hash(TEST_PASSWORD))
            session.add(user)
            await session.commit()
            return user

    return _make_user


@pytest.fixture
async def user(make_user) -> User:
    return await make_user()


@pytest.fixture
def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
async def catalog(session_factory) -> dict:
    """Two topics: Arrays (order 1, three problems) and Graphs (order 2, none)."""
    async with session_factory() as session:
        arrays = Topic(title="Arrays", description="Contiguous data", icon="🧮", order=1)
        graphs = Topic(title="Graphs", description="Nodes and edges", order=2)
        session.add_all([arrays, graphs])
        await session.flush()

        problems = [
            Problem(
                topic_id=arrays.id,
                title="Two Sum",
                difficulty=Difficulty.EASY,
                leetcode_url="https://leetcode.com/problems/two-sum/",
                order=1,
            ),
            Problem(topic_id=arrays.id, title="Three Sum", difficulty=Difficulty.MEDIUM, order=2),
            Problem(
                topic_id=arrays.id,
                title="Trapping Rain Water",
                difficulty=Difficulty.HARD,
                youtube_url="https://youtube.com/watch?v=rain",
                order=3,
            ),
        ]
        session.add_all(problems)
        await session.commit()

        return {"arrays": arrays, "graphs": graphs, "problems": problems}


@pytest.fixture
async def api_client(app: FastAPI, user: User) -> AsyncGenerator[ThinkscopeClient, None]:
    """Typed client authenticated as ``user``."""
    transport = httpx.ASGITransport(app=app)
    async with ThinkscopeClient("http://test", token=create_access_token(user.id), transport=transport) as api:
        yield api
