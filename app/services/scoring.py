import logging
from typing import List, Set

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import StoreUnavailableError, ValidationError
from app.domain.attempts import AttemptTracker
from app.models.score import Score
from app.repositories.quiz_repository import QuizRepository
from app.repositories.score_repository import ScoreRepository
from app.repositories.user_repository import UserRepository

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _require_int(value, field: str, positive: bool = False) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Invalid data format", field=field)
    if positive and value <= 0:
        raise ValidationError(f"{field} must be a positive identifier", field=field)
    return value


class ScoreService:
    """Records finished sessions and answers attempt questions"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = ScoreRepository(db)
        self.user_repository = UserRepository(db)
        self.quiz_repository = QuizRepository(db)

    def submit(self, user_id: int, quiz_id: int, score: int) -> Score:
        """
        Append the result of a finished session.

        The record is committed before this returns, so a following
        ``has_taken`` call already sees it. Leaderboards are recomputed on
        read and need no invalidation.
        """
        _require_int(user_id, "user_id", positive=True)
        _require_int(quiz_id, "quiz_id", positive=True)
        _require_int(score, "score")

        try:
            if self.user_repository.get_by_id(user_id) is None:
                raise ValidationError(f"User {user_id} does not exist", field="user_id")
            if self.quiz_repository.get_by_id(quiz_id) is None:
                raise ValidationError(f"Quiz {quiz_id} does not exist", field="quiz_id")
            record = self.repository.insert_score(user_id, quiz_id, score)
        except IntegrityError as e:
            self.db.rollback()
            raise ValidationError(f"Invalid score reference: {e.orig}")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Save score failed for user {user_id}, quiz {quiz_id}: {e}")
            raise StoreUnavailableError("Failed to save score")

        logger.info(f"✅ Saved score {score} for user {user_id} on quiz {quiz_id}")
        return record

    def _read(self, fetch, description: str):
        try:
            return fetch()
        except SQLAlchemyError as e:
            logger.error(f"❌ Fetch {description} failed: {e}")
            raise StoreUnavailableError(f"Failed to fetch {description}")

    def list_scores_by_user(self, user_id: int) -> List[Score]:
        return self._read(lambda: self.repository.list_by_user(user_id), "user scores")

    def list_scores_by_quiz(self, quiz_id: int) -> List[Score]:
        return self._read(lambda: self.repository.list_by_quiz(quiz_id), "quiz scores")

    def list_all_scores(self) -> List[Score]:
        return self._read(self.repository.list_all, "scores")

    def taken_quiz_ids(self, user_id: int) -> Set[int]:
        tracker = AttemptTracker(self.list_scores_by_user(user_id))
        return tracker.taken_quiz_ids(user_id)

    def has_taken(self, user_id: int, quiz_id: int) -> bool:
        return quiz_id in self.taken_quiz_ids(user_id)
