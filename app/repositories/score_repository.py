from typing import List

from sqlalchemy.orm import Session

from app.domain.leaderboard_domain import ScoreRow
from app.models.score import Score
from app.models.user import User


class ScoreRepository:
    """Append-only store for score records"""

    def __init__(self, db: Session):
        self.db = db

    def insert_score(self, user_id: int, quiz_id: int, score: int) -> Score:
        """Append one score record in a single insert"""
        db_score = Score(user_id=user_id, quiz_id=quiz_id, score=score)
        self.db.add(db_score)
        self.db.commit()
        self.db.refresh(db_score)
        return db_score

    def list_by_user(self, user_id: int) -> List[Score]:
        return (
            self.db.query(Score)
            .filter(Score.user_id == user_id)
            .order_by(Score.created_at, Score.id)
            .all()
        )

    def list_by_quiz(self, quiz_id: int) -> List[Score]:
        return (
            self.db.query(Score)
            .filter(Score.quiz_id == quiz_id)
            .order_by(Score.created_at, Score.id)
            .all()
        )

    def list_all(self) -> List[Score]:
        return self.db.query(Score).order_by(Score.created_at, Score.id).all()

    def list_rows(self, quiz_id: int = None) -> List[ScoreRow]:
        """Score records joined with usernames, for ranking"""
        query = self.db.query(Score, User.username).join(User, Score.user_id == User.id)
        if quiz_id is not None:
            query = query.filter(Score.quiz_id == quiz_id)

        return [
            ScoreRow(
                record_id=score.id,
                user_id=score.user_id,
                username=username,
                quiz_id=score.quiz_id,
                score=score.score,
                created_at=score.created_at,
            )
            for score, username in query.order_by(Score.created_at, Score.id).all()
        ]
