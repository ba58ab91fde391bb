from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import StoreUnavailableError, ValidationError
from app.schemas.quiz import (
    CreatedResponse,
    QuestionCreate,
    QuestionResponse,
    QuizCreate,
    QuizResponse,
)
from app.services.quiz import QuizService

router = APIRouter(prefix="/api", tags=["quiz"])


@router.get("/quizzes", response_model=List[QuizResponse])
def list_quizzes(db: Session = Depends(get_db)):
    """List every quiz in creation order"""
    try:
        return QuizService(db).list_quizzes()
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.get("/quizzes/{quiz_id}/questions", response_model=List[QuestionResponse])
def list_questions(quiz_id: int, db: Session = Depends(get_db)):
    """Questions of a quiz; only non-empty options are returned"""
    try:
        return QuizService(db).get_questions(quiz_id)
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.post(
    "/quizzes",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_quiz(request: QuizCreate, db: Session = Depends(get_db)):
    """Create a new quiz (admin)"""
    try:
        quiz_id = QuizService(db).create_quiz(
            request.title, request.description, request.is_points_based
        )
        return CreatedResponse(id=quiz_id)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.post(
    "/questions",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_question(request: QuestionCreate, db: Session = Depends(get_db)):
    """
    Add a question to a quiz (admin)

    Accepts 2 to 4 non-empty options; ``correct_option`` is the 1-based
    position of the right answer among them.
    """
    try:
        question_id = QuizService(db).add_question(
            request.quiz_id,
            request.question_text,
            request.options,
            request.correct_option,
        )
        return CreatedResponse(id=question_id)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
