from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.comment import Comment
from src.models.user import User


class CommentRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self, poll_id: int, user_id: int, text: str, created_at: Optional[datetime] = None
    ) -> Comment:
        """Создать комментарий."""
        comment = Comment(poll_id=poll_id, user_id=user_id, comment_text=text)
        if created_at is not None:
            comment.created_at = created_at
        self.session.add(comment)
        await self.session.flush()
        return comment

    async def get_for_poll(self, poll_id: int, limit: int = 50) -> List[Tuple[Comment, str]]:
        """Получить комментарии опроса с именами авторов, новые первыми."""
        result = await self.session.execute(
            select(Comment, User.username)
            .join(User, Comment.user_id == User.id)
            .where(Comment.poll_id == poll_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .limit(limit)
        )
        return [(row[0], row[1]) for row in result.all()]

    async def count_by_poll(self, poll_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Comment.id)).where(Comment.poll_id == poll_id)
        )
        return int(result.scalar_one())
