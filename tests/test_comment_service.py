"""
Тесты для CommentService.
"""
import pytest

from src.services.comment_service import CommentService
from src.services.poll_service import PollService
from src.services.results import OperationStatus


async def _create_poll(session, creator_id):
    result = await PollService(session).create_poll(
        creator_id=creator_id, title="Weekend plans", options=["Hike", "Movies"]
    )
    return result.poll_id


@pytest.mark.asyncio
async def test_add_and_list_comments(db_session, make_user):
    """Комментарии возвращаются с именем автора, новые первыми."""
    creator = await make_user("creator")
    alice = await make_user("alice")
    poll_id = await _create_poll(db_session, creator.id)
    service = CommentService(db_session)

    assert (await service.add_comment(poll_id, creator.id, "  Let's decide by Friday  ")).ok
    assert (await service.add_comment(poll_id, alice.id, "Hiking, obviously")).ok

    comments = await service.list_comments(poll_id)

    assert [(c.username, c.text) for c in comments] == [
        ("alice", "Hiking, obviously"),
        ("creator", "Let's decide by Friday"),
    ]
    assert len(await service.list_comments(poll_id, limit=1)) == 1


@pytest.mark.asyncio
async def test_add_comment_validation(mock_session, mock_poll_repo, mock_comment_repo):
    """Пустой и слишком длинный комментарий отклоняются до обращения к БД."""
    service = CommentService(mock_session, poll_repo=mock_poll_repo, comment_repo=mock_comment_repo)

    empty = await service.add_comment(1, 1, "   ")
    assert empty.status is OperationStatus.VALIDATION_ERROR
    assert empty.errors == ["Comment cannot be empty."]

    too_long = await service.add_comment(1, 1, "x" * 1001)
    assert too_long.errors == ["Comment is too long (max 1000 characters)."]

    mock_poll_repo.get_by_id.assert_not_called()
    mock_comment_repo.create.assert_not_called()


@pytest.mark.asyncio
async def test_add_comment_to_unknown_poll(db_session, make_user):
    user = await make_user("alice")

    result = await CommentService(db_session).add_comment(999, user.id, "Hello")

    assert result.status is OperationStatus.NOT_FOUND
    assert await CommentService(db_session).list_comments(999) == []
