from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from src.utils.time_utils import is_poll_closed, utcnow

from .database import Base


def _utcnow_naive() -> datetime:
    # В БД время хранится в UTC без tzinfo
    return utcnow().replace(tzinfo=None)


class Poll(Base):
    __tablename__ = "polls"

    id = Column(Integer, primary_key=True, index=True)
    creator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    end_time = Column(DateTime, nullable=True)  # UTC, None = опрос бессрочный
    created_at = Column(DateTime, nullable=False, default=_utcnow_naive)
    updated_at = Column(DateTime, nullable=True, onupdate=_utcnow_naive)

    def is_closed(self, now: Optional[datetime] = None) -> bool:
        """Закрыт ли опрос (вычисляется по end_time, не хранится)."""
        return is_poll_closed(self.end_time, now)

    def is_owned_by(self, user_id: int) -> bool:
        return self.creator_id == user_id
