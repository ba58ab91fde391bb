from .quiz_repository import QuizRepository
from .score_repository import ScoreRepository
from .user_repository import UserRepository

__all__ = ["UserRepository", "QuizRepository", "ScoreRepository"]
