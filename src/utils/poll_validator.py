"""
Утилиты для валидации данных опроса.
"""
from datetime import datetime
from typing import Any, Iterable, List, Optional, Tuple

from src.utils.time_utils import add_one_year, parse_end_time, to_utc


TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000
OPTION_MAX_LENGTH = 255
MIN_OPTIONS = 2
MAX_OPTIONS = 20


def clean_options(options: Optional[Iterable[Any]]) -> List[str]:
    """Обрезать пробелы и выбросить пустые варианты, сохранив порядок."""
    if not options:
        return []
    cleaned = []
    for option in options:
        if option is None:
            continue
        text = str(option).strip()
        if text:
            cleaned.append(text)
    return cleaned


def validate_title(title: Optional[str]) -> Optional[str]:
    """Вернуть сообщение об ошибке для заголовка или None."""
    title = (title or "").strip()
    if not title:
        return "Poll title is required."
    if len(title) > TITLE_MAX_LENGTH:
        return f"Poll title is too long (max {TITLE_MAX_LENGTH} characters)."
    if len(title) < TITLE_MIN_LENGTH:
        return f"Poll title must be at least {TITLE_MIN_LENGTH} characters long."
    return None


def validate_options(options: List[str]) -> List[str]:
    """Проверить уже очищенный список вариантов."""
    errors: List[str] = []

    for option in options:
        if len(option) > OPTION_MAX_LENGTH:
            errors.append(
                f"Option text is too long (max {OPTION_MAX_LENGTH} characters): {option[:50]}..."
            )
            break

    if len(options) < MIN_OPTIONS:
        errors.append(f"Poll must have at least {MIN_OPTIONS} options.")
    if len(options) > MAX_OPTIONS:
        errors.append(f"Poll cannot have more than {MAX_OPTIONS} options.")

    # Сравнение точное, с учетом регистра
    if len(options) != len(set(options)):
        errors.append("Duplicate options are not allowed.")

    return errors


def validate_end_time(
    end_time: Any,
    now: datetime,
    tz_name: str = "UTC",
    current_end_time: Optional[datetime] = None,
) -> Tuple[Optional[datetime], List[str]]:
    """
    Проверить время окончания опроса.

    Args:
        end_time: Введенное значение (строка, datetime или None)
        now: Текущее время
        tz_name: Часовой пояс для значений без tzinfo
        current_end_time: Текущее время окончания (при редактировании)

    Returns:
        Кортеж (parsed_end_time, errors); parsed_end_time в UTC
    """
    try:
        parsed = parse_end_time(end_time, tz_name)
    except ValueError:
        return None, ["Invalid end time format."]

    if parsed is None:
        return None, []

    now = to_utc(now)
    errors: List[str] = []

    # У уже закрытого опроса время окончания в прошлом допустимо
    already_closed = current_end_time is not None and to_utc(current_end_time) <= now
    if parsed <= now and not already_closed:
        errors.append("End time must be in the future.")
    if parsed > add_one_year(now):
        errors.append("End time cannot be more than 1 year from now.")

    return parsed, errors


def validate_poll_data(
    title: Optional[str],
    description: Optional[str],
    end_time: Any,
    options: Optional[Iterable[Any]],
    now: datetime,
    tz_name: str = "UTC",
    current_end_time: Optional[datetime] = None,
) -> Tuple[List[str], Optional[datetime], List[str]]:
    """
    Валидировать данные опроса целиком, собирая все ошибки.

    Returns:
        Кортеж (cleaned_options, parsed_end_time, errors)
    """
    errors: List[str] = []

    title_error = validate_title(title)
    if title_error:
        errors.append(title_error)

    description = (description or "").strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        errors.append(f"Description is too long (max {DESCRIPTION_MAX_LENGTH} characters).")

    parsed_end_time, end_time_errors = validate_end_time(
        end_time, now, tz_name=tz_name, current_end_time=current_end_time
    )
    errors.extend(end_time_errors)

    cleaned = clean_options(options)
    errors.extend(validate_options(cleaned))

    return cleaned, parsed_end_time, errors
