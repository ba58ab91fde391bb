from .auth import AuthService
from .leaderboard import LeaderboardService
from .quiz import QuizService
from .scoring import ScoreService

__all__ = ["AuthService", "QuizService", "ScoreService", "LeaderboardService"]
