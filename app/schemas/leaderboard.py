from pydantic import BaseModel


class GlobalLeaderboardEntry(BaseModel):
    username: str
    total_score: int
    rank: int


class QuizLeaderboardEntry(BaseModel):
    username: str
    score: int
    rank: int
