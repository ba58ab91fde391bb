from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import StoreUnavailableError, ValidationError
from app.schemas.score import (
    ScoreCreate,
    ScoreResponse,
    ScoreSubmitResponse,
    TakenQuizzesResponse,
)
from app.services.scoring import ScoreService

router = APIRouter(prefix="/api/scores", tags=["scores"])


@router.post(
    "",
    response_model=ScoreSubmitResponse,
    status_code=status.HTTP_201_CREATED,
)
def submit_score(request: ScoreCreate, db: Session = Depends(get_db)):
    """Record the final score of a finished quiz session"""
    try:
        record = ScoreService(db).submit(request.user_id, request.quiz_id, request.score)
        return ScoreSubmitResponse(success=True, id=record.id)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.get("", response_model=List[ScoreResponse])
def list_scores(db: Session = Depends(get_db)):
    try:
        return ScoreService(db).list_all_scores()
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.get("/user/{user_id}", response_model=List[ScoreResponse])
def list_user_scores(user_id: int, db: Session = Depends(get_db)):
    """Score records of one user; clients derive taken quizzes from them"""
    try:
        return ScoreService(db).list_scores_by_user(user_id)
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.get("/user/{user_id}/taken", response_model=TakenQuizzesResponse)
def list_taken_quizzes(user_id: int, db: Session = Depends(get_db)):
    try:
        quiz_ids = ScoreService(db).taken_quiz_ids(user_id)
        return TakenQuizzesResponse(user_id=user_id, quiz_ids=sorted(quiz_ids))
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.get("/quiz/{quiz_id}", response_model=List[ScoreResponse])
def list_quiz_scores(quiz_id: int, db: Session = Depends(get_db)):
    try:
        return ScoreService(db).list_scores_by_quiz(quiz_id)
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
