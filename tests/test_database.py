"""
Тесты для генератора сессий БД.
"""
import pytest
from unittest.mock import patch

from sqlalchemy import func, select

from config.settings import settings
from src.models.database import create_engine_from_settings, create_session_factory, get_db
from src.models.user import User


@pytest.mark.asyncio
async def test_get_db_commits_on_success(db_engine):
    session_factory = create_session_factory(db_engine)

    async for session in get_db(session_factory):
        session.add(User(username="alice", email="alice@example.com", password_hash="x"))

    async with session_factory() as session:
        assert (await session.execute(select(func.count(User.id)))).scalar_one() == 1


@pytest.mark.asyncio
async def test_get_db_rolls_back_on_error(db_engine):
    """Исключение внутри блока откатывает транзакцию."""
    session_factory = create_session_factory(db_engine)
    gen = get_db(session_factory)
    session = await gen.__anext__()
    session.add(User(username="bob", email="bob@example.com", password_hash="x"))
    await session.flush()

    with pytest.raises(RuntimeError):
        await gen.athrow(RuntimeError("boom"))

    async with session_factory() as check:
        assert (await check.execute(select(func.count(User.id)))).scalar_one() == 0


def test_debug_enables_sql_echo():
    """В режиме DEBUG движок логирует SQL."""
    with patch.object(settings, "DEBUG", True), patch.object(settings, "DB_ECHO", False):
        engine = create_engine_from_settings("sqlite+aiosqlite://")

    assert engine.sync_engine.echo is True
