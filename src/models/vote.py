from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    ForeignKeyConstraint,
    Integer,
    UniqueConstraint,
)

from .database import Base
from .poll import _utcnow_naive


class Vote(Base):
    __tablename__ = "votes"
    __table_args__ = (
        # Один голос на пользователя в опросе, проверяется самой БД
        UniqueConstraint("user_id", "poll_id", name="uq_votes_user_poll"),
        # poll_id выводится из варианта и обязан с ним совпадать
        ForeignKeyConstraint(
            ["option_id", "poll_id"],
            ["poll_options.id", "poll_options.poll_id"],
            name="fk_votes_option_poll",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    option_id = Column(Integer, nullable=False, index=True)
    poll_id = Column(Integer, nullable=False, index=True)
    voted_at = Column(DateTime, nullable=False, default=_utcnow_naive)
