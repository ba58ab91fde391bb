from sqlalchemy import Column, ForeignKey, Integer
from sqlalchemy.sql import func
from sqlalchemy.types import DateTime

from app.core.database import Base


class Score(Base):
    __tablename__ = "scores"

    # No (user_id, quiz_id) unique constraint: records are append-only and the
    # one-attempt rule is enforced by the client
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    quiz_id = Column(
        Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    score = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
