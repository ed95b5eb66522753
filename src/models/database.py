from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from config.settings import settings


Base = declarative_base()


def create_engine_from_settings(database_url: Optional[str] = None, **kwargs) -> AsyncEngine:
    """Создать движок БД. Пул настраивается только для серверных СУБД."""
    url = database_url or settings.DATABASE_URL
    options = {"echo": settings.DB_ECHO or settings.DEBUG, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        options["pool_size"] = settings.DB_POOL_SIZE
        options["max_overflow"] = settings.DB_MAX_OVERFLOW
    options.update(kwargs)
    return create_async_engine(url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Создать все таблицы (модели должны быть импортированы заранее)."""
    # Регистрируем модели в Base.metadata
    from src.models import comment, poll, poll_option, user, vote  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Асинхронный генератор сессий БД с автоматическим коммитом/роллбеком."""
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
