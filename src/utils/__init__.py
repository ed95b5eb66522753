"""Утилиты для валидации, работы со временем и обработки ошибок."""

from .error_handler import (
    ErrorHandler,
    StoreFailure,
    error_handler,
)
from .time_utils import (
    is_poll_closed,
    parse_end_time,
    utcnow,
)

__all__ = [
    'ErrorHandler',
    'StoreFailure',
    'error_handler',
    'is_poll_closed',
    'parse_end_time',
    'utcnow',
]
