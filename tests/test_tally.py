"""
Unit-тесты для подсчета результатов опроса.
"""
from src.services.tally import compute_tally, percentage_of, total_votes


def test_tally_orders_by_votes_then_option_id():
    """Сортировка: по убыванию голосов, при равенстве по возрастанию option_id."""
    rows = compute_tally([(3, "C", 2), (1, "A", 2), (2, "B", 5), (4, "D", 0)])

    assert [r.option_id for r in rows] == [2, 1, 3, 4]
    assert [r.vote_count for r in rows] == [5, 2, 2, 0]


def test_tally_without_votes_gives_zero_percentages():
    """При нуле голосов все проценты равны 0."""
    rows = compute_tally([(1, "Red", 0), (2, "Blue", 0)])

    assert [r.percentage for r in rows] == [0.0, 0.0]
    assert [r.option_id for r in rows] == [1, 2]
    assert total_votes(rows) == 0


def test_tally_single_vote():
    """Один голос дает 100% и 0%."""
    rows = compute_tally([(1, "Red", 1), (2, "Blue", 0)])

    assert rows[0].option_text == "Red"
    assert rows[0].vote_count == 1
    assert rows[0].percentage == 100.0
    assert rows[1].option_text == "Blue"
    assert rows[1].percentage == 0.0


def test_tally_percentages_sum_to_hundred():
    """Сумма процентов равна 100 с точностью до округления."""
    rows = compute_tally([(1, "A", 1), (2, "B", 1), (3, "C", 1)])

    assert [r.percentage for r in rows] == [33.3, 33.3, 33.3]
    assert abs(sum(r.percentage for r in rows) - 100) <= 0.1 * len(rows)


def test_percentage_rounds_half_up():
    """Округление половины вверх до одного знака."""
    assert percentage_of(1, 16) == 6.3
    assert percentage_of(2, 3) == 66.7
    assert percentage_of(1, 6) == 16.7
    assert percentage_of(0, 0) == 0.0


def test_tally_ignores_input_order():
    """Порядок входных строк не влияет на результат."""
    data = [(5, "E", 1), (2, "B", 1), (9, "I", 3)]

    assert compute_tally(data) == compute_tally(list(reversed(data)))
