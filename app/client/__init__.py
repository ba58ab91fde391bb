from .admin import AdminConsole
from .api_client import QuizApiClient
from .player import QuizCard, QuizPlayer

__all__ = ["QuizApiClient", "QuizPlayer", "QuizCard", "AdminConsole"]
