import pytest
import pytest_asyncio
from unittest.mock import AsyncMock

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from src.models.database import create_engine_from_settings, create_session_factory, init_models
from src.repositories.user_repository import UserRepository


@pytest_asyncio.fixture
async def db_engine():
    """Фикстура движка in-memory SQLite со всеми таблицами."""
    engine = create_engine_from_settings(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Фикстура реальной сессии БД."""
    session_factory = create_session_factory(db_engine)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def make_user(db_session):
    """Фабрика пользователей в тестовой БД."""

    async def _make_user(username: str):
        repo = UserRepository(db_session)
        user = await repo.create(
            username=username,
            email=f"{username}@example.com",
            password_hash="not-a-real-hash",
        )
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def mock_session():
    """Фикстура для мока сессии БД."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def mock_poll_repo():
    """Фикстура для мока PollRepository."""
    return AsyncMock()


@pytest.fixture
def mock_vote_repo():
    """Фикстура для мока VoteRepository."""
    return AsyncMock()


@pytest.fixture
def mock_comment_repo():
    """Фикстура для мока CommentRepository."""
    return AsyncMock()


# pytest-asyncio автоматически управляет event loop
