import asyncio
import logging
import sys
from pathlib import Path

# Добавляем корневую директорию проекта в PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.models.database import create_engine_from_settings, init_models
from src.utils.logging_setup import setup_logging


logger = logging.getLogger(__name__)


async def create_tables() -> None:
    """Создание всех таблиц в базе данных по моделям."""
    engine = create_engine_from_settings()
    try:
        await init_models(engine)
        logger.info("Tables created successfully")
    except Exception as e:  # noqa: BLE001
        logger.error("Error creating tables: %s", e)
        raise
    finally:
        await engine.dispose()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(create_tables())
