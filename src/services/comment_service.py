from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.repositories.comment_repository import CommentRepository
from src.repositories.poll_repository import PollRepository
from src.services.results import OperationResult, OperationStatus
from src.utils.error_handler import error_handler
from src.utils.time_utils import to_db_datetime, utcnow


logger = logging.getLogger(__name__)

COMMENT_MAX_LENGTH = 1000


@dataclass(frozen=True)
class CommentView:
    comment_id: int
    user_id: int
    username: str
    text: str
    created_at: datetime


class CommentService:
    def __init__(
        self,
        session: AsyncSession,
        poll_repo: Optional[PollRepository] = None,
        comment_repo: Optional[CommentRepository] = None,
    ) -> None:
        self.session = session
        self.poll_repo = poll_repo or PollRepository(session)
        self.comment_repo = comment_repo or CommentRepository(session)

    async def add_comment(self, poll_id: int, user_id: int, text: Optional[str]) -> OperationResult:
        """Добавить комментарий к опросу."""
        text = (text or "").strip()
        if not text:
            return OperationResult.failure(OperationStatus.VALIDATION_ERROR, "Comment cannot be empty.")
        if len(text) > COMMENT_MAX_LENGTH:
            return OperationResult.failure(
                OperationStatus.VALIDATION_ERROR,
                f"Comment is too long (max {COMMENT_MAX_LENGTH} characters).",
            )

        poll = await self.poll_repo.get_by_id(poll_id)
        if not poll:
            return OperationResult.failure(OperationStatus.NOT_FOUND, "Poll not found.")

        try:
            await self.comment_repo.create(poll_id, user_id, text, created_at=to_db_datetime(utcnow()))
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise error_handler.handle_error(e, "add_comment") from e

        logger.info("User %s commented on poll %s", user_id, poll_id)
        return OperationResult.success(poll_id=poll_id, user_id=user_id)

    async def list_comments(self, poll_id: int, limit: Optional[int] = None) -> List[CommentView]:
        """Комментарии опроса, новые первыми."""
        rows = await self.comment_repo.get_for_poll(poll_id, limit or settings.COMMENTS_PAGE_SIZE)
        return [
            CommentView(
                comment_id=comment.id,
                user_id=comment.user_id,
                username=username,
                text=comment.comment_text,
                created_at=comment.created_at,
            )
            for comment, username in rows
        ]
