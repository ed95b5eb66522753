from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.comment import Comment
from src.models.poll import Poll
from src.models.poll_option import PollOption
from src.models.user import User
from src.models.vote import Vote

logger = logging.getLogger(__name__)


class PollRepository:
    """Работа с опросами и их вариантами."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, poll_id: int) -> Optional[Poll]:
        """Получить опрос по ID."""
        result = await self.session.execute(select(Poll).where(Poll.id == poll_id))
        return result.scalar_one_or_none()

    async def get_with_creator_name(self, poll_id: int) -> Optional[Tuple[Poll, str]]:
        """Получить опрос вместе с именем автора."""
        result = await self.session.execute(
            select(Poll, User.username)
            .join(User, Poll.creator_id == User.id)
            .where(Poll.id == poll_id)
        )
        row = result.first()
        return (row[0], row[1]) if row else None

    async def get_by_creator(self, creator_id: int) -> List[Poll]:
        """Получить опросы пользователя, новые первыми."""
        result = await self.session.execute(
            select(Poll)
            .where(Poll.creator_id == creator_id)
            .order_by(Poll.created_at.desc(), Poll.id.desc())
        )
        return list(result.scalars().all())

    async def create(self, data: Dict[str, Any]) -> Poll:
        obj = Poll(**data)
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def update(self, poll_id: int, **kwargs: Any) -> None:
        await self.session.execute(
            update(Poll).where(Poll.id == poll_id).values(**kwargs)
        )

    async def create_options(self, poll_id: int, option_texts: Iterable[str]) -> List[PollOption]:
        """Создать варианты опроса в порядке перечисления."""
        options = [PollOption(poll_id=poll_id, option_text=text) for text in option_texts]
        if not options:
            return []
        self.session.add_all(options)
        await self.session.flush()
        return options

    async def get_options(self, poll_id: int) -> List[PollOption]:
        """Получить все варианты опроса."""
        result = await self.session.execute(
            select(PollOption).where(PollOption.poll_id == poll_id).order_by(PollOption.id)
        )
        return list(result.scalars().all())

    async def get_option(self, poll_id: int, option_id: int) -> Optional[PollOption]:
        """Получить вариант, только если он принадлежит опросу."""
        result = await self.session.execute(
            select(PollOption).where(
                PollOption.id == option_id,
                PollOption.poll_id == poll_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_options_with_vote_counts(self, poll_id: int) -> List[Tuple[int, str, int]]:
        """Получить варианты с количеством голосов: (option_id, option_text, vote_count)."""
        result = await self.session.execute(
            select(PollOption.id, PollOption.option_text, func.count(Vote.id))
            .outerjoin(Vote, Vote.option_id == PollOption.id)
            .where(PollOption.poll_id == poll_id)
            .group_by(PollOption.id, PollOption.option_text)
            .order_by(PollOption.id)
        )
        return [(row[0], row[1], int(row[2])) for row in result.all()]

    async def delete_unvoted_options(self, option_ids: Iterable[int]) -> int:
        """Удалить варианты без голосов. Варианты, за которые уже проголосовали, остаются."""
        ids = list(option_ids)
        if not ids:
            return 0
        has_votes = select(Vote.id).where(Vote.option_id == PollOption.id).exists()
        result = await self.session.execute(
            delete(PollOption)
            .where(PollOption.id.in_(ids), ~has_votes)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_with_dependencies(self, poll_id: int) -> Dict[str, int]:
        """
        Удалить опрос со всеми зависимыми строками.

        Порядок: голоса -> комментарии -> варианты -> опрос. Транзакцией
        управляет вызывающий код.
        """
        option_ids = select(PollOption.id).where(PollOption.poll_id == poll_id)
        votes = await self.session.execute(
            delete(Vote).where(Vote.option_id.in_(option_ids))
        )
        comments = await self.session.execute(
            delete(Comment).where(Comment.poll_id == poll_id)
        )
        options = await self.session.execute(
            delete(PollOption).where(PollOption.poll_id == poll_id)
        )
        polls = await self.session.execute(delete(Poll).where(Poll.id == poll_id))
        counts = {
            "votes": votes.rowcount,
            "comments": comments.rowcount,
            "options": options.rowcount,
            "polls": polls.rowcount,
        }
        logger.debug("Deleted rows for poll %s: %s", poll_id, counts)
        return counts
