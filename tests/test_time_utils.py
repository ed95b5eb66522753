"""
Unit-тесты для работы со временем опросов.
"""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from src.utils.time_utils import add_one_year, is_poll_closed, parse_end_time, to_utc


NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def test_poll_without_end_time_never_closes():
    """Опрос без end_time не закрывается."""
    assert is_poll_closed(SimpleNamespace(end_time=None), NOW) is False
    assert is_poll_closed({"end_time": None}, NOW) is False
    assert is_poll_closed(None, NOW) is False


def test_poll_closes_at_end_time():
    """Опрос закрыт, когда end_time <= now."""
    assert is_poll_closed(NOW, NOW) is True
    assert is_poll_closed(NOW - timedelta(seconds=1), NOW) is True
    assert is_poll_closed(NOW + timedelta(seconds=1), NOW) is False


def test_naive_end_time_is_treated_as_utc():
    """Naive-время из БД считается UTC."""
    naive_end = datetime(2026, 10, 19, 11, 59)

    assert is_poll_closed(SimpleNamespace(end_time=naive_end), NOW) is True
    assert to_utc(naive_end) == datetime(2026, 10, 19, 11, 59, tzinfo=timezone.utc)


def test_aware_end_time_in_other_zone_is_normalized():
    """Сравнение выполняется в UTC независимо от зоны end_time."""
    plus_eight = timezone(timedelta(hours=8))
    end_time = datetime(2026, 10, 19, 19, 0, tzinfo=plus_eight)  # 11:00 UTC

    assert is_poll_closed({"end_time": end_time}, NOW) is True


def test_string_end_time():
    """Строковое end_time разбирается как ISO-8601."""
    assert is_poll_closed("2026-10-19T11:00:00Z", NOW) is True
    assert is_poll_closed("2026-10-19 13:00", NOW) is False
    assert is_poll_closed("garbage", NOW) is False


def test_parse_end_time_empty_values():
    """Пустые значения дают None."""
    assert parse_end_time(None) is None
    assert parse_end_time("   ") is None


def test_add_one_year_handles_leap_day():
    """29 февраля переходит в 28 февраля."""
    assert add_one_year(datetime(2028, 2, 29, 10, 0)) == datetime(2029, 2, 28, 10, 0)
    assert add_one_year(datetime(2026, 10, 19)) == datetime(2027, 10, 19)
