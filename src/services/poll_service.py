from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.models.poll import Poll
from src.models.poll_option import PollOption
from src.repositories.comment_repository import CommentRepository
from src.repositories.poll_repository import PollRepository
from src.repositories.vote_repository import VoteRepository
from src.services.option_diff import OptionChangeKind, blocked_removals, diff_options
from src.services.results import BlockedOption, OperationResult, OperationStatus
from src.utils.error_handler import error_handler
from src.utils.poll_validator import validate_poll_data
from src.utils.time_utils import is_poll_closed, to_db_datetime, utcnow


logger = logging.getLogger(__name__)


@dataclass
class PollDetails:
    """Опрос и его метаданные для страниц и экспорта."""

    poll: Poll
    creator_name: str
    options: List[PollOption] = field(default_factory=list)
    is_closed: bool = False
    total_votes: int = 0
    comment_count: int = 0


class PollService:
    """Создание, редактирование и удаление опросов."""

    def __init__(
        self,
        session: AsyncSession,
        poll_repo: Optional[PollRepository] = None,
        vote_repo: Optional[VoteRepository] = None,
        comment_repo: Optional[CommentRepository] = None,
    ) -> None:
        self.session = session
        self.poll_repo = poll_repo or PollRepository(session)
        self.vote_repo = vote_repo or VoteRepository(session)
        self.comment_repo = comment_repo or CommentRepository(session)

    async def get_poll(self, poll_id: int) -> Optional[Poll]:
        return await self.poll_repo.get_by_id(poll_id)

    async def list_user_polls(self, creator_id: int) -> List[Poll]:
        return await self.poll_repo.get_by_creator(creator_id)

    def is_poll_closed(self, poll: Any) -> bool:
        """Закрыт ли опрос на текущий момент (сравнение в UTC)."""
        return is_poll_closed(poll, utcnow())

    async def get_poll_details(self, poll_id: int) -> Optional[PollDetails]:
        """Получить опрос с автором, вариантами и счетчиками."""
        found = await self.poll_repo.get_with_creator_name(poll_id)
        if not found:
            return None
        poll, creator_name = found
        return PollDetails(
            poll=poll,
            creator_name=creator_name,
            options=await self.poll_repo.get_options(poll_id),
            is_closed=poll.is_closed(utcnow()),
            total_votes=await self.vote_repo.count_by_poll(poll_id),
            comment_count=await self.comment_repo.count_by_poll(poll_id),
        )

    async def create_poll(
        self,
        creator_id: int,
        title: str,
        description: Optional[str] = None,
        end_time: Any = None,
        options: Optional[Iterable[str]] = None,
    ) -> OperationResult:
        """
        Создать опрос вместе с вариантами в одной транзакции.

        Returns:
            OperationResult с poll_id при успехе или со списком всех ошибок валидации
        """
        now = utcnow()
        cleaned_options, parsed_end_time, errors = validate_poll_data(
            title,
            description,
            end_time,
            options,
            now,
            tz_name=settings.APP_TIMEZONE,
        )
        if errors:
            logger.info("Poll creation rejected for user %s: %s", creator_id, errors)
            return OperationResult.failure(OperationStatus.VALIDATION_ERROR, *errors)

        try:
            poll = await self.poll_repo.create(
                {
                    "creator_id": creator_id,
                    "title": title.strip(),
                    "description": (description or "").strip() or None,
                    "end_time": to_db_datetime(parsed_end_time),
                    "created_at": to_db_datetime(now),
                }
            )
            poll_id = poll.id
            await self.poll_repo.create_options(poll_id, cleaned_options)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise error_handler.handle_error(e, "create_poll") from e

        logger.info(
            "Poll %s created by user %s with %d options", poll_id, creator_id, len(cleaned_options)
        )
        return OperationResult.success(poll_id=poll_id)

    async def edit_poll(
        self,
        poll_id: int,
        editor_id: int,
        title: str,
        description: Optional[str] = None,
        end_time: Any = None,
        options: Optional[Iterable[str]] = None,
    ) -> OperationResult:
        """
        Отредактировать опрос.

        Варианты сверяются с текущими: новые добавляются, варианты без голосов
        удаляются, а удаление варианта с голосами отклоняет всю правку.
        Если голосов в опросе нет, набор вариантов пересоздается целиком.
        """
        poll = await self.poll_repo.get_by_id(poll_id)
        if not poll:
            return OperationResult.failure(OperationStatus.NOT_FOUND, "Poll not found.")
        if not poll.is_owned_by(editor_id):
            logger.warning("User %s attempted to edit poll %s owned by %s", editor_id, poll_id, poll.creator_id)
            return OperationResult.failure(
                OperationStatus.FORBIDDEN, "You are not authorized to edit this poll."
            )

        now = utcnow()
        cleaned_options, parsed_end_time, errors = validate_poll_data(
            title,
            description,
            end_time,
            options,
            now,
            tz_name=settings.APP_TIMEZONE,
            current_end_time=poll.end_time,
        )
        if errors:
            logger.info("Poll %s edit rejected: %s", poll_id, errors)
            return OperationResult.failure(OperationStatus.VALIDATION_ERROR, *errors, poll_id=poll_id)

        current = await self.poll_repo.get_options_with_vote_counts(poll_id)
        has_votes = any(count > 0 for _, _, count in current)
        changes = diff_options(current, cleaned_options)

        blocked = blocked_removals(changes)
        if blocked:
            logger.info(
                "Poll %s edit would remove voted options: %s",
                poll_id,
                [c.option_text for c in blocked],
            )
            return OperationResult(
                OperationStatus.CANNOT_REMOVE_VOTED_OPTION,
                errors=[
                    f'Cannot remove option "{c.option_text}" because it has {c.vote_count} vote(s).'
                    for c in blocked
                ],
                poll_id=poll_id,
                blocked=[BlockedOption(c.option_id, c.option_text, c.vote_count) for c in blocked],
            )

        if has_votes:
            to_remove = [c.option_id for c in changes if c.kind is OptionChangeKind.REMOVED]
            to_add = [c.option_text for c in changes if c.kind is OptionChangeKind.ADDED]
        else:
            to_remove = [option_id for option_id, _, _ in current]
            to_add = cleaned_options

        try:
            await self.poll_repo.update(
                poll_id,
                title=title.strip(),
                description=(description or "").strip() or None,
                end_time=to_db_datetime(parsed_end_time),
                updated_at=to_db_datetime(now),
            )
            removed = await self.poll_repo.delete_unvoted_options(to_remove)
            if removed != len(to_remove):
                # Кто-то проголосовал за удаляемый вариант во время правки
                await self.session.rollback()
                logger.warning("Poll %s received votes during edit, edit rolled back", poll_id)
                return OperationResult.failure(
                    OperationStatus.CANNOT_REMOVE_VOTED_OPTION,
                    "An option received votes while the poll was being edited. Please try again.",
                    poll_id=poll_id,
                )
            await self.poll_repo.create_options(poll_id, to_add)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise error_handler.handle_error(e, "edit_poll") from e

        logger.info(
            "Poll %s updated by user %s (removed=%d, added=%d)",
            poll_id,
            editor_id,
            len(to_remove),
            len(to_add),
        )
        return OperationResult.success(poll_id=poll_id)

    async def delete_poll(self, poll_id: int, requester_id: int) -> OperationResult:
        """Удалить опрос вместе с голосами, комментариями и вариантами."""
        poll = await self.poll_repo.get_by_id(poll_id)
        if not poll:
            return OperationResult.failure(OperationStatus.NOT_FOUND, "Poll not found.")
        if not poll.is_owned_by(requester_id):
            logger.warning(
                "User %s attempted to delete poll %s owned by %s", requester_id, poll_id, poll.creator_id
            )
            return OperationResult.failure(
                OperationStatus.FORBIDDEN, "You are not authorized to delete this poll."
            )

        try:
            counts = await self.poll_repo.delete_with_dependencies(poll_id)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise error_handler.handle_error(e, "delete_poll") from e

        logger.info(
            "Poll %s deleted by user %s (%d votes, %d comments, %d options)",
            poll_id,
            requester_id,
            counts["votes"],
            counts["comments"],
            counts["options"],
        )
        return OperationResult.success(poll_id=poll_id)
