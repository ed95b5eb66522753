"""
Результаты операций сервисов.

Нарушения бизнес-правил не выбрасываются как исключения, а возвращаются
вызывающему коду в виде OperationResult.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class OperationStatus(str, Enum):
    OK = "ok"
    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    POLL_CLOSED = "poll_closed"
    ALREADY_VOTED = "already_voted"
    INVALID_OPTION = "invalid_option"
    CANNOT_REMOVE_VOTED_OPTION = "cannot_remove_voted_option"


@dataclass(frozen=True)
class BlockedOption:
    """Вариант, который нельзя удалить, потому что за него уже голосовали."""

    option_id: int
    option_text: str
    vote_count: int


@dataclass
class OperationResult:
    status: OperationStatus
    errors: List[str] = field(default_factory=list)
    poll_id: Optional[int] = None
    user_id: Optional[int] = None
    blocked: List[BlockedOption] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is OperationStatus.OK

    @classmethod
    def success(cls, **kwargs) -> "OperationResult":
        return cls(OperationStatus.OK, **kwargs)

    @classmethod
    def failure(cls, status: OperationStatus, *errors: str, **kwargs) -> "OperationResult":
        return cls(status, errors=list(errors), **kwargs)
