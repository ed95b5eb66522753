from dataclasses import dataclass, field
from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.poll_option import PollOption
from src.repositories.poll_repository import PollRepository
from src.repositories.vote_repository import VoteRepository
from src.services.results import OperationResult, OperationStatus
from src.services.tally import TallyRow, compute_tally, total_votes
from src.utils.error_handler import error_handler
from src.utils.time_utils import to_db_datetime, utcnow


logger = logging.getLogger(__name__)


@dataclass
class PollResults:
    status: OperationStatus
    rows: List[TallyRow] = field(default_factory=list)
    total_votes: int = 0
    message: Optional[str] = None


class VoteService:
    """Голосование и подсчет результатов: один голос на пользователя в опросе."""

    def __init__(
        self,
        session: AsyncSession,
        poll_repo: Optional[PollRepository] = None,
        vote_repo: Optional[VoteRepository] = None,
    ) -> None:
        self.session = session
        self.poll_repo = poll_repo or PollRepository(session)
        self.vote_repo = vote_repo or VoteRepository(session)

    async def cast_vote(self, poll_id: int, user_id: int, option_id: int) -> OperationResult:
        """
        Проголосовать за вариант опроса.

        Проверки по порядку: опрос существует, опрос не закрыт, пользователь
        еще не голосовал, вариант принадлежит опросу. Уникальный индекс
        (user_id, poll_id) отсекает параллельный повторный голос.
        """
        poll = await self.poll_repo.get_by_id(poll_id)
        if not poll:
            return OperationResult.failure(OperationStatus.NOT_FOUND, "Poll not found.")

        now = utcnow()
        if poll.is_closed(now):
            logger.info("Vote rejected: poll %s is closed (user %s)", poll_id, user_id)
            return OperationResult.failure(
                OperationStatus.POLL_CLOSED, "This poll has ended.", poll_id=poll_id
            )

        if await self.vote_repo.has_voted(poll_id, user_id):
            logger.info("Vote rejected: user %s already voted in poll %s", user_id, poll_id)
            return OperationResult.failure(
                OperationStatus.ALREADY_VOTED,
                "You have already voted in this poll.",
                poll_id=poll_id,
            )

        option = await self.poll_repo.get_option(poll_id, option_id)
        if not option:
            logger.info("Vote rejected: option %s does not belong to poll %s", option_id, poll_id)
            return OperationResult.failure(
                OperationStatus.INVALID_OPTION, "Invalid option selected.", poll_id=poll_id
            )

        try:
            await self.vote_repo.create(
                user_id=user_id,
                option_id=option.id,
                poll_id=poll_id,
                voted_at=to_db_datetime(now),
            )
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            # Проиграли гонку параллельному голосу либо вариант удалили
            if await self.vote_repo.has_voted(poll_id, user_id):
                logger.warning("Concurrent duplicate vote rejected for user %s in poll %s", user_id, poll_id)
                return OperationResult.failure(
                    OperationStatus.ALREADY_VOTED,
                    "You have already voted in this poll.",
                    poll_id=poll_id,
                )
            logger.warning("Option %s disappeared while voting in poll %s", option_id, poll_id)
            return OperationResult.failure(
                OperationStatus.INVALID_OPTION, "Invalid option selected.", poll_id=poll_id
            )
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise error_handler.handle_error(e, "cast_vote") from e

        logger.info("User %s voted for option %s in poll %s", user_id, option_id, poll_id)
        return OperationResult.success(poll_id=poll_id, user_id=user_id)

    async def tally(self, poll_id: int) -> List[TallyRow]:
        """Результаты: голоса и проценты по каждому варианту."""
        rows = await self.poll_repo.get_options_with_vote_counts(poll_id)
        return compute_tally(rows)

    async def can_view_results(self, poll_id: int, user_id: Optional[int]) -> bool:
        """Видны ли результаты: пользователь голосовал, опрос закрыт или он автор."""
        poll = await self.poll_repo.get_by_id(poll_id)
        if not poll:
            return False
        if user_id is not None and poll.is_owned_by(user_id):
            return True
        if poll.is_closed(utcnow()):
            return True
        if user_id is None:
            return False
        return await self.vote_repo.has_voted(poll_id, user_id)

    async def get_user_vote(self, poll_id: int, user_id: int) -> Optional[PollOption]:
        """Вариант, выбранный пользователем, или None."""
        return await self.vote_repo.get_user_choice(poll_id, user_id)

    async def get_results(self, poll_id: int, user_id: Optional[int]) -> PollResults:
        """Результаты опроса с проверкой видимости."""
        poll = await self.poll_repo.get_by_id(poll_id)
        if not poll:
            return PollResults(OperationStatus.NOT_FOUND, message="Poll not found.")
        if not await self.can_view_results(poll_id, user_id):
            return PollResults(
                OperationStatus.FORBIDDEN, message="You must vote first to see results."
            )
        rows = await self.tally(poll_id)
        return PollResults(OperationStatus.OK, rows=rows, total_votes=total_votes(rows))
