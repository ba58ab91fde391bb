from typing import Optional


class QuizAppError(Exception):
    """Base class for every error raised by the quiz services"""


class ValidationError(QuizAppError):
    """Malformed or missing input; ``field`` names the offending value"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class DuplicateUsernameError(QuizAppError):
    def __init__(self, username: str):
        super().__init__("Username already exists")
        self.username = username


class InvalidCredentialsError(QuizAppError):
    # Unknown user and wrong password share this message on purpose
    def __init__(self):
        super().__init__("Invalid credentials")


class EmptyQuizError(QuizAppError):
    def __init__(self, quiz_id=None):
        super().__init__("This quiz has no questions!")
        self.quiz_id = quiz_id


class StoreUnavailableError(QuizAppError):
    """Transport or persistence failure; the caller may retry"""


class InvalidTransitionError(QuizAppError):
    """A session operation was requested from a phase that does not allow it"""
