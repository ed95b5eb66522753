"""
Подсчет результатов опроса.

Чистые функции над строками (option_id, option_text, vote_count); используются
и VoteService.tally, и любым экспортом результатов.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Tuple


@dataclass(frozen=True)
class TallyRow:
    option_id: int
    option_text: str
    vote_count: int
    percentage: float


def percentage_of(count: int, total: int) -> float:
    """Процент с одним знаком после запятой, округление половины вверх."""
    if total <= 0:
        return 0.0
    value = Decimal(count) * 100 / Decimal(total)
    return float(value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_tally(rows: Iterable[Tuple[int, str, int]]) -> List[TallyRow]:
    """
    Построить результаты опроса.

    Сортировка: по убыванию количества голосов, при равенстве по возрастанию
    option_id. При нуле голосов все проценты равны 0.
    """
    counted = [(int(option_id), text, int(count or 0)) for option_id, text, count in rows]
    total = sum(count for _, _, count in counted)
    counted.sort(key=lambda row: (-row[2], row[0]))
    return [
        TallyRow(
            option_id=option_id,
            option_text=text,
            vote_count=count,
            percentage=percentage_of(count, total),
        )
        for option_id, text, count in counted
    ]


def total_votes(rows: Iterable[TallyRow]) -> int:
    return sum(row.vote_count for row in rows)
