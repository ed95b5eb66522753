"""
Работа со временем опросов.

Во всем приложении используется UTC: в БД время хранится как UTC без tzinfo,
сравнения выполняются между aware-датами в UTC.
"""
from datetime import datetime, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo
import logging


logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Текущее время в UTC (aware)."""
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Привести дату к aware UTC. Naive-значения считаются уже записанными в UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_db_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """Подготовить дату к записи в БД (naive UTC)."""
    if value is None:
        return None
    return to_utc(value).replace(tzinfo=None)


def parse_end_time(value: Any, tz_name: str = "UTC") -> Optional[datetime]:
    """
    Разобрать время окончания опроса.

    Args:
        value: datetime или строка ISO-8601 (в т.ч. формат поля datetime-local)
        tz_name: Часовой пояс для значений без tzinfo

    Returns:
        aware datetime в UTC или None, если значение пустое

    Raises:
        ValueError: Если строку не удалось разобрать
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise ValueError(f"Invalid end time: {value!r}") from e

    if parsed.tzinfo is None:
        zone = timezone.utc if tz_name.upper() == "UTC" else ZoneInfo(tz_name)
        parsed = parsed.replace(tzinfo=zone)
    return parsed.astimezone(timezone.utc)


def add_one_year(value: datetime) -> datetime:
    """Прибавить календарный год (29 февраля -> 28 февраля)."""
    try:
        return value.replace(year=value.year + 1)
    except ValueError:
        return value.replace(year=value.year + 1, day=28)


def is_poll_closed(poll: Any, now: Optional[datetime] = None) -> bool:
    """
    Проверить, закрыт ли опрос.

    Принимает объект с атрибутом end_time, словарь с ключом end_time,
    саму дату или строку. Опрос без end_time не закрывается никогда.
    """
    if poll is None:
        return False

    if isinstance(poll, (datetime, str)):
        end_time = poll
    elif isinstance(poll, dict):
        end_time = poll.get("end_time")
    else:
        end_time = getattr(poll, "end_time", None)

    if not end_time:
        return False

    if isinstance(end_time, str):
        try:
            end_time = parse_end_time(end_time)
        except ValueError:
            logger.error("Invalid end_time value %r, treating poll as open", end_time)
            return False

    current = to_utc(now) if now is not None else utcnow()
    return to_utc(end_time) <= current
