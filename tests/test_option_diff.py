"""
Unit-тесты для сверки вариантов опроса при редактировании.
"""
from src.services.option_diff import OptionChangeKind, blocked_removals, diff_options


def _kinds(changes):
    return {c.option_text: c.kind for c in changes}


def test_diff_marks_unchanged_added_and_removed():
    """Вариант без голосов удаляется, новый добавляется."""
    current = [(1, "Red", 2), (2, "Blue", 0)]

    changes = diff_options(current, ["Red", "Green"])

    assert _kinds(changes) == {
        "Red": OptionChangeKind.UNCHANGED,
        "Blue": OptionChangeKind.REMOVED,
        "Green": OptionChangeKind.ADDED,
    }
    assert blocked_removals(changes) == []


def test_diff_blocks_removal_of_voted_option():
    """Удаление варианта с голосами помечается как заблокированное."""
    current = [(1, "X", 3), (2, "Y", 0), (3, "Z", 1)]

    changes = diff_options(current, ["Y", "Z", "W"])

    blocked = blocked_removals(changes)
    assert len(blocked) == 1
    assert blocked[0].option_text == "X"
    assert blocked[0].option_id == 1
    assert blocked[0].vote_count == 3


def test_diff_keeps_submission_order_for_added():
    """Добавленные варианты идут в порядке отправки."""
    changes = diff_options([(1, "A", 0)], ["C", "A", "B"])

    added = [c.option_text for c in changes if c.kind is OptionChangeKind.ADDED]
    assert added == ["C", "B"]


def test_diff_is_case_sensitive():
    """Сравнение текстов вариантов с учетом регистра."""
    changes = diff_options([(1, "Red", 1)], ["red", "Blue"])

    assert _kinds(changes)["Red"] is OptionChangeKind.REMOVAL_BLOCKED
    assert _kinds(changes)["red"] is OptionChangeKind.ADDED
