"""
Сверка текущих вариантов опроса с отправленным списком при редактировании.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple


class OptionChangeKind(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"
    REMOVAL_BLOCKED = "removal_blocked"


@dataclass(frozen=True)
class OptionChange:
    kind: OptionChangeKind
    option_text: str
    option_id: Optional[int] = None
    vote_count: int = 0


def diff_options(
    current: Iterable[Tuple[int, str, int]],
    submitted: Iterable[str],
) -> List[OptionChange]:
    """
    Сравнить варианты.

    Args:
        current: Текущие варианты (option_id, option_text, vote_count)
        submitted: Очищенный список новых текстов вариантов

    Returns:
        Изменения: сначала по текущим вариантам в их порядке, затем добавленные
        в порядке отправки. Вариант с голосами, отсутствующий в новом списке,
        помечается REMOVAL_BLOCKED.
    """
    submitted_list = list(submitted)
    submitted_set = set(submitted_list)
    changes: List[OptionChange] = []
    current_texts = set()

    for option_id, text, vote_count in current:
        current_texts.add(text)
        if text in submitted_set:
            kind = OptionChangeKind.UNCHANGED
        elif vote_count > 0:
            kind = OptionChangeKind.REMOVAL_BLOCKED
        else:
            kind = OptionChangeKind.REMOVED
        changes.append(OptionChange(kind, text, option_id, vote_count))

    for text in submitted_list:
        if text not in current_texts:
            changes.append(OptionChange(OptionChangeKind.ADDED, text))
            current_texts.add(text)

    return changes


def blocked_removals(changes: Iterable[OptionChange]) -> List[OptionChange]:
    return [c for c in changes if c.kind is OptionChangeKind.REMOVAL_BLOCKED]
