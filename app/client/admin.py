import logging
from typing import Callable, List, Optional, Sequence

from app.client.api_client import QuizApiClient
from app.core.exceptions import StoreUnavailableError, ValidationError
from app.domain.notification import Notification
from app.schemas.quiz import QuizResponse

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class AdminConsole:
    """Form handling of the admin page: create quizzes and add questions"""

    def __init__(
        self,
        api: Optional[QuizApiClient] = None,
        notify: Optional[Callable[[Notification], None]] = None,
    ):
        self.api = api or QuizApiClient()
        self.notify = notify or (lambda notification: None)
        self.quizzes: List[QuizResponse] = []
        self.last_notification: Optional[Notification] = None

    def _notify(self, notification: Notification) -> None:
        self.last_notification = notification
        self.notify(notification)

    def refresh_quizzes(self) -> List[QuizResponse]:
        try:
            self.quizzes = self.api.list_quizzes()
        except StoreUnavailableError:
            self._notify(Notification.error("Error", "Failed to load quizzes"))
        return self.quizzes

    def create_quiz(
        self, title: str, description: str = "", is_points_based: bool = True
    ) -> Optional[int]:
        if not title or not title.strip():
            self._notify(Notification.error("Error", "Quiz title is required"))
            return None

        try:
            quiz_id = self.api.create_quiz(title, description or None, is_points_based)
        except ValidationError as e:
            self._notify(Notification.error("Error", str(e) or "Failed to create quiz"))
            return None
        except StoreUnavailableError:
            self._notify(Notification.error("Error", "Network error"))
            return None

        self._notify(Notification.success("Success", "Quiz created successfully!"))
        self.refresh_quizzes()
        return quiz_id

    def add_question(
        self,
        quiz_id: Optional[int],
        question_text: str,
        options: Sequence[str],
        correct_option: int,
    ) -> Optional[int]:
        """Blank option fields are dropped before sending, as on the admin form"""
        cleaned = [option.strip() for option in options if option and option.strip()]

        if not quiz_id:
            self._notify(Notification.error("Error", "Please select a quiz"))
            return None
        if not question_text or not question_text.strip():
            self._notify(Notification.error("Error", "Question text is required"))
            return None
        if len(cleaned) < 2:
            self._notify(Notification.error("Error", "Please provide at least 2 options"))
            return None

        try:
            question_id = self.api.add_question(
                quiz_id, question_text, cleaned, correct_option
            )
        except ValidationError as e:
            self._notify(Notification.error("Error", str(e) or "Failed to add question"))
            return None
        except StoreUnavailableError:
            self._notify(
                Notification.error("Error", "Network error: Failed to add question")
            )
            return None

        self._notify(Notification.success("Success", "Question added successfully!"))
        return question_id
