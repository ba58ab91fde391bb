from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, validator


class QuizCreate(BaseModel):
    title: str = Field(..., description="Quiz title", min_length=1, max_length=255)
    description: Optional[str] = Field(None, description="Optional description")
    is_points_based: bool = Field(True, description="Points based or practice quiz")

    @validator("title")
    def validate_title(cls, v):
        if not v or not v.strip():
            raise ValueError("Quiz title is required")
        return v.strip()


class QuizResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    is_points_based: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class QuestionCreate(BaseModel):
    quiz_id: int = Field(..., description="ID of the owning quiz")
    question_text: str = Field(..., description="The question shown to players")
    options: List[Optional[str]] = Field(
        ..., description="Between 2 and 4 answer options, in display order"
    )
    correct_option: int = Field(
        ..., description="1-based position of the correct option"
    )


class QuestionResponse(BaseModel):
    id: int
    quiz_id: int
    question_text: str
    options: List[str] = Field(..., description="Non-empty options in storage order")
    correct_option: int


class CreatedResponse(BaseModel):
    id: int
