import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from werkzeug.security import generate_password_hash

from src.models.user import User
from src.repositories.user_repository import UserRepository
from src.services.results import OperationResult, OperationStatus
from src.utils.error_handler import error_handler
from src.utils.user_validator import validate_registration

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Username is already taken. Please choose a different one."
EMAIL_TAKEN = "Email is already registered. Please use a different email or try logging in."


class UserService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.user_repo = UserRepository(session)

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return await self.user_repo.get_by_id(user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self.user_repo.get_by_username(username)

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> OperationResult:
        """
        Зарегистрировать пользователя.

        Все ошибки формы собираются вместе; занятость имени и email
        проверяется только после успешной валидации.
        """
        errors = validate_registration(username, email, password, confirm_password)
        if errors:
            return OperationResult.failure(OperationStatus.VALIDATION_ERROR, *errors)

        username = username.strip()
        email = email.strip()

        if await self.user_repo.get_by_username(username):
            errors.append(USERNAME_TAKEN)
        if await self.user_repo.get_by_email(email):
            errors.append(EMAIL_TAKEN)
        if errors:
            return OperationResult.failure(OperationStatus.VALIDATION_ERROR, *errors)

        try:
            user = await self.user_repo.create(
                username=username,
                email=email,
                password_hash=generate_password_hash(password),
            )
            user_id = user.id
            await self.session.commit()
        except IntegrityError:
            # Имя или email заняли параллельно
            await self.session.rollback()
            logger.warning("Registration race for username=%s email=%s", username, email)
            errors = []
            if await self.user_repo.get_by_username(username):
                errors.append(USERNAME_TAKEN)
            if not errors or await self.user_repo.get_by_email(email):
                errors.append(EMAIL_TAKEN)
            return OperationResult.failure(OperationStatus.VALIDATION_ERROR, *errors)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise error_handler.handle_error(e, "register") from e

        logger.info("User registered: %s (ID: %s)", username, user_id)
        return OperationResult.success(user_id=user_id)
