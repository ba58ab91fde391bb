from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, validator


class ScoreCreate(BaseModel):
    user_id: int
    quiz_id: int
    score: int

    @validator("user_id", "quiz_id", "score", pre=True)
    def reject_booleans(cls, v):
        if isinstance(v, bool):
            raise ValueError("Invalid data format")
        return v


class ScoreResponse(BaseModel):
    id: int
    user_id: int
    quiz_id: int
    score: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ScoreSubmitResponse(BaseModel):
    success: bool = True
    id: int


class TakenQuizzesResponse(BaseModel):
    user_id: int
    quiz_ids: List[int] = Field(..., description="Quizzes the user already attempted")
