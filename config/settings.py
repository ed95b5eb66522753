from typing import Optional
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Загружаем .env файл из корневой директории проекта
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Глобальные настройки приложения, считываются из .env."""

    # Application
    APP_NAME: str = "VoteSphere"
    APP_ENV: str = "production"
    DEBUG: bool = False
    # Часовой пояс, в котором интерпретируется end_time без tzinfo
    APP_TIMEZONE: str = "UTC"

    # Database
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "votesphere"
    DB_USER: str = "votesphere"
    DB_PASSWORD: str = ""
    DATABASE_URL: Optional[str] = None
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 30

    # Comments
    COMMENTS_PAGE_SIZE: int = 50

    # Paths
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Path = (BASE_DIR / "logs" / "votesphere.log")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # Формируем DSN для SQLAlchemy + asyncpg, если он не задан явно
        if not self.DATABASE_URL:
            self.DATABASE_URL = (
                f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
                f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            )

        # Создаем необходимые директории
        self.LOGS_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
