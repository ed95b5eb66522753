from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from .database import Base
from .poll import _utcnow_naive


class PollOption(Base):
    __tablename__ = "poll_options"
    __table_args__ = (
        UniqueConstraint("poll_id", "option_text", name="uq_poll_options_poll_text"),
        # Нужен для составного внешнего ключа из votes
        UniqueConstraint("id", "poll_id", name="uq_poll_options_id_poll"),
        # ID вариантов не переиспользуются после пересоздания набора
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    poll_id = Column(Integer, ForeignKey("polls.id"), nullable=False, index=True)
    option_text = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=_utcnow_naive)
