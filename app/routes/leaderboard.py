from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import StoreUnavailableError
from app.schemas.leaderboard import GlobalLeaderboardEntry, QuizLeaderboardEntry
from app.services.leaderboard import LeaderboardService

router = APIRouter(prefix="/api/leaderboard", tags=["leaderboard"])


@router.get("", response_model=List[GlobalLeaderboardEntry])
def overall_leaderboard(db: Session = Depends(get_db)):
    """Top 10 users by total score across all quizzes, densely ranked"""
    try:
        return LeaderboardService(db).compute_global()
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.get("/{quiz_id}", response_model=List[QuizLeaderboardEntry])
def quiz_leaderboard(quiz_id: int, db: Session = Depends(get_db)):
    """Top 10 individual scores of one quiz, densely ranked"""
    try:
        return LeaderboardService(db).compute_per_quiz(quiz_id)
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
