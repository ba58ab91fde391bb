import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import StoreUnavailableError
from app.domain.leaderboard_domain import LeaderboardEngine
from app.repositories.score_repository import ScoreRepository
from app.schemas.leaderboard import GlobalLeaderboardEntry, QuizLeaderboardEntry

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class LeaderboardService:
    """Standings are recomputed from the score table on every call"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = ScoreRepository(db)
        self.engine = LeaderboardEngine(
            excluded_username=settings.LEADERBOARD_EXCLUDED_USERNAME,
            limit=settings.LEADERBOARD_LIMIT,
        )

    def compute_global(self) -> List[GlobalLeaderboardEntry]:
        try:
            rows = self.repository.list_rows()
        except SQLAlchemyError as e:
            logger.error(f"❌ Overall leaderboard error: {e}")
            raise StoreUnavailableError("Failed to fetch overall leaderboard")

        return [
            GlobalLeaderboardEntry(
                username=entry.username, total_score=entry.score, rank=entry.rank
            )
            for entry in self.engine.compute_global(rows)
        ]

    def compute_per_quiz(self, quiz_id: int) -> List[QuizLeaderboardEntry]:
        try:
            rows = self.repository.list_rows(quiz_id=quiz_id)
        except SQLAlchemyError as e:
            logger.error(f"❌ Leaderboard error for quiz {quiz_id}: {e}")
            raise StoreUnavailableError("Failed to fetch leaderboard")

        return [
            QuizLeaderboardEntry(username=entry.username, score=entry.score, rank=entry.rank)
            for entry in self.engine.compute_per_quiz(rows, quiz_id)
        ]
