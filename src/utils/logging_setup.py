import logging

from config.settings import settings


logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Настройка логирования: файл из настроек и консоль. DEBUG включает подробный уровень."""
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(settings.LOG_FILE),
            logging.StreamHandler(),
        ],
    )
    # SQLAlchemy пишет SQL только при DB_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logger.info(
        "%s logging configured (env=%s, level=%s)",
        settings.APP_NAME,
        settings.APP_ENV,
        logging.getLevelName(level),
    )
