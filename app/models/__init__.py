from .quiz import Question, Quiz
from .score import Score
from .user import User

__all__ = ["User", "Quiz", "Question", "Score"]
