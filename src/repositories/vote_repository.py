from datetime import datetime
from typing import Optional
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.poll_option import PollOption
from src.models.vote import Vote

logger = logging.getLogger(__name__)


class VoteRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_user_vote(self, poll_id: int, user_id: int) -> Optional[Vote]:
        """Получить голос пользователя в опросе (через варианты опроса)."""
        result = await self.session.execute(
            select(Vote)
            .join(PollOption, Vote.option_id == PollOption.id)
            .where(PollOption.poll_id == poll_id, Vote.user_id == user_id)
        )
        return result.scalars().first()

    async def get_user_choice(self, poll_id: int, user_id: int) -> Optional[PollOption]:
        """Получить вариант, выбранный пользователем."""
        result = await self.session.execute(
            select(PollOption)
            .join(Vote, Vote.option_id == PollOption.id)
            .where(PollOption.poll_id == poll_id, Vote.user_id == user_id)
        )
        return result.scalars().first()

    async def has_voted(self, poll_id: int, user_id: int) -> bool:
        return await self.get_user_vote(poll_id, user_id) is not None

    async def create(
        self,
        user_id: int,
        option_id: int,
        poll_id: int,
        voted_at: Optional[datetime] = None,
    ) -> Vote:
        """Создать запись о голосе пользователя."""
        vote = Vote(user_id=user_id, option_id=option_id, poll_id=poll_id)
        if voted_at is not None:
            vote.voted_at = voted_at
        self.session.add(vote)
        await self.session.flush()
        return vote

    async def count_by_poll(self, poll_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Vote.id))
            .join(PollOption, Vote.option_id == PollOption.id)
            .where(PollOption.poll_id == poll_id)
        )
        return int(result.scalar_one())
