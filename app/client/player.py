import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Set, Tuple

from app.client.api_client import QuizApiClient
from app.core.exceptions import (
    DuplicateUsernameError,
    EmptyQuizError,
    InvalidCredentialsError,
    StoreUnavailableError,
    ValidationError,
)
from app.domain.attempts import AttemptTracker
from app.domain.notification import Notification
from app.domain.quiz_session import QuizSession, SessionObserver, SessionState
from app.schemas.leaderboard import GlobalLeaderboardEntry, QuizLeaderboardEntry
from app.schemas.quiz import QuizResponse
from app.schemas.user import UserResponse

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@dataclass
class QuizCard:
    """What the quiz picker shows for one quiz"""

    id: int
    title: str
    description: str
    mode_label: str
    taken: bool

    @property
    def button_label(self) -> str:
        return "Already Taken" if self.taken else "Start Quiz"


class QuizPlayer(SessionObserver):
    """
    Player-side controller: account, quiz picker, one quiz session at a time.

    All user-visible outcomes, including store failures, are reported through
    ``notify``; presentation hooks of the running session go to ``view``.
    """

    def __init__(
        self,
        api: Optional[QuizApiClient] = None,
        scheduler=None,
        notify: Optional[Callable[[Notification], None]] = None,
        view: Optional[SessionObserver] = None,
    ):
        self.api = api or QuizApiClient()
        self.scheduler = scheduler
        self.notify = notify or (lambda notification: None)
        self.view = view or SessionObserver()

        self.current_user: Optional[UserResponse] = None
        self.attempts = AttemptTracker()
        self.quizzes: List[QuizResponse] = []
        self.standings: List[GlobalLeaderboardEntry] = []
        self.session: Optional[QuizSession] = None
        # (user_id, quiz_id, score) of finished quizzes not yet stored, oldest first
        self.pending_results: List[Tuple[int, int, int]] = []
        self.last_notification: Optional[Notification] = None

    def _notify(self, notification: Notification) -> None:
        self.last_notification = notification
        self.notify(notification)

    # Account

    def register(self, username: str, password: str, confirm: str) -> Optional[int]:
        if not username or not password or not confirm:
            self._notify(Notification.error("Error", "Please fill all fields"))
            return None
        if password != confirm:
            self._notify(Notification.error("Error", "Passwords do not match"))
            return None

        try:
            user_id = self.api.register(username, password)
        except (DuplicateUsernameError, ValidationError) as e:
            self._notify(Notification.error("Error", str(e) or "Registration failed"))
            return None
        except StoreUnavailableError:
            self._notify(Notification.error("Error", "Network error"))
            return None

        self._notify(
            Notification.success("Success", "Registration successful! Please login")
        )
        return user_id

    def login(self, username: str, password: str) -> Optional[UserResponse]:
        if not username or not password:
            self._notify(Notification.error("Error", "Please fill all fields"))
            return None

        try:
            user = self.api.login(username, password)
        except InvalidCredentialsError as e:
            self._notify(Notification.error("Error", str(e)))
            return None
        except StoreUnavailableError:
            self._notify(Notification.error("Error", "Network error"))
            return None

        self.current_user = user
        self.attempts.clear()
        self._notify(Notification.success("Success", "Login successful!"))
        self.refresh_taken_quizzes()
        self.refresh_quizzes()
        self.leaderboard()
        return user

    def logout(self) -> None:
        if self.session is not None:
            self.abandon()
        self.current_user = None
        self.attempts.clear()
        self.quizzes = []
        self.leaderboard()
        self._notify(Notification.info("Info", "You have been logged out"))

    # Quiz picker

    def refresh_taken_quizzes(self) -> Set[int]:
        """Reload the attempt gate; on failure the last known set is kept"""
        if self.current_user is None:
            self.attempts.clear()
            return set()

        user_id = self.current_user.id
        try:
            records = self.api.list_scores_by_user(user_id)
        except StoreUnavailableError as e:
            logger.error(f"Failed to fetch taken quizzes: {e}")
            self._notify(Notification.error("Error", "Failed to load taken quizzes"))
            return self.attempts.taken_quiz_ids(user_id)

        self.attempts = AttemptTracker(records)
        return self.attempts.taken_quiz_ids(user_id)

    def refresh_quizzes(self) -> List[QuizResponse]:
        if self.current_user is None:
            return []
        try:
            self.quizzes = self.api.list_quizzes()
        except StoreUnavailableError:
            self._notify(Notification.error("Error", "Failed to load quizzes"))
        return self.quizzes

    def has_taken(self, quiz_id: int) -> bool:
        """A quiz whose result is still waiting to be stored counts as taken"""
        if self.current_user is None:
            return False
        if self._has_pending(quiz_id):
            return True
        return self.attempts.has_taken(self.current_user.id, quiz_id)

    def quiz_cards(self) -> List[QuizCard]:
        return [
            QuizCard(
                id=quiz.id,
                title=quiz.title,
                description=quiz.description or "No description available",
                mode_label="Points Based" if quiz.is_points_based else "Practice",
                taken=self.has_taken(quiz.id),
            )
            for quiz in self.quizzes
        ]

    # Session

    @property
    def in_session(self) -> bool:
        return self.session is not None and not self.session.state.is_finished

    def start_quiz(self, quiz_id: int) -> Optional[SessionState]:
        if self.current_user is None:
            self._notify(Notification.error("Error", "Please login to play quizzes"))
            return None
        if self._has_pending(quiz_id):
            self._notify(
                Notification.info(
                    "Info", "Your score for this quiz is not saved yet, please retry"
                )
            )
            return None
        if self.has_taken(quiz_id):
            self._notify(Notification.info("Info", "You have already taken this quiz"))
            return None

        try:
            questions = self.api.get_questions(quiz_id)
        except StoreUnavailableError:
            self._notify(Notification.error("Error", "Failed to start quiz"))
            return None

        quiz = next((q for q in self.quizzes if q.id == quiz_id), quiz_id)
        session = QuizSession(
            observer=self, submitter=self._submit_result, scheduler=self.scheduler
        )
        try:
            session.start(quiz, questions)
        except EmptyQuizError as e:
            self._notify(Notification.error("Error", str(e)))
            return None
        except Exception:
            # Never leave a half-started countdown behind
            session.abandon()
            raise

        if self.in_session:
            self.session.abandon()
        self.session = session
        return session.state

    def select_answer(self, option_index: int) -> Optional[SessionState]:
        if self.session is None:
            return None
        return self.session.select_answer(option_index)

    def advance(self) -> Optional[SessionState]:
        if self.session is None:
            return None
        return self.session.advance()

    def abandon(self) -> None:
        if self.session is not None:
            self.session.abandon()
            self.session = None

    # Result submission

    def _submit_result(self, state: SessionState) -> None:
        self.pending_results.append((self.current_user.id, state.quiz_id, state.score))
        self._flush_pending_results()

    def retry_submit(self) -> bool:
        if not self.pending_results:
            return False
        return self._flush_pending_results()

    def _has_pending(self, quiz_id: int) -> bool:
        if self.current_user is None:
            return False
        user_id = self.current_user.id
        return any(
            pending_user == user_id and pending_quiz == quiz_id
            for pending_user, pending_quiz, _ in self.pending_results
        )

    def _flush_pending_results(self) -> bool:
        """
        Store queued results oldest first. Stops at the first transport failure
        and keeps that result and everything after it for ``retry_submit``.
        """
        saved = []
        failed = False
        while self.pending_results:
            user_id, quiz_id, score = self.pending_results[0]
            try:
                self.api.submit_score(user_id, quiz_id, score)
            except StoreUnavailableError as e:
                logger.error(f"Failed to save score for quiz {quiz_id}: {e}")
                failed = True
                break
            except ValidationError as e:
                # The store refused the record; retrying cannot help
                logger.error(f"Score for quiz {quiz_id} was rejected: {e}")
                self.pending_results.pop(0)
                self._notify(Notification.error("Score Not Saved", str(e)))
                continue

            # Only a stored record may close the gate
            self.pending_results.pop(0)
            self.attempts.mark_taken(user_id, quiz_id)
            saved.append(score)

        if saved:
            self.refresh_quizzes()
            self.leaderboard()
            for score in saved:
                self._notify(
                    Notification.info(
                        "Quiz Completed!", f"Your final score: {score} points"
                    )
                )
        if failed:
            self._notify(Notification.error("Error", "Failed to save score"))
            return False
        return True

    # Leaderboards

    def leaderboard(self) -> List[GlobalLeaderboardEntry]:
        try:
            self.standings = self.api.global_leaderboard()
        except StoreUnavailableError as e:
            logger.error(f"Leaderboard error: {e}")
            self._notify(Notification.error("Error", "Failed to load leaderboard"))
        return self.standings

    def quiz_leaderboard(self, quiz_id: int) -> List[QuizLeaderboardEntry]:
        try:
            return self.api.quiz_leaderboard(quiz_id)
        except StoreUnavailableError as e:
            logger.error(f"Leaderboard error for quiz {quiz_id}: {e}")
            self._notify(Notification.error("Error", "Failed to load leaderboard"))
            return []

    # SessionObserver

    def on_question(self, state: SessionState) -> None:
        self.view.on_question(state)

    def on_tick(self, state: SessionState) -> None:
        self.view.on_tick(state)

    def on_answer(self, state: SessionState, correct: Optional[bool]) -> None:
        self.view.on_answer(state, correct)

    def on_notification(self, notification: Notification) -> None:
        self._notify(notification)

    def on_complete(self, state: SessionState) -> None:
        self.view.on_complete(state)
