import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

from app.core.exceptions import EmptyQuizError, InvalidTransitionError, ValidationError
from app.domain.countdown import QUESTION_TIME_LIMIT, Countdown
from app.domain.notification import Notification

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CORRECT_ANSWER_POINTS = 10
WRONG_ANSWER_PENALTY = 1


class SessionPhase(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    ANSWER_LOCKED = "answer_locked"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


@dataclass
class SessionState:
    """Everything one player's pass through one quiz needs to remember"""

    quiz: Any = None
    questions: List[Any] = field(default_factory=list)
    question_index: int = 0
    score: int = 0
    answer_submitted: bool = False
    selected_option: Optional[int] = None
    options: List[str] = field(default_factory=list)
    time_left: int = QUESTION_TIME_LIMIT
    generation: int = 0
    phase: SessionPhase = SessionPhase.NOT_STARTED

    @property
    def quiz_id(self):
        return getattr(self.quiz, "id", self.quiz)

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def current_question(self):
        if 0 <= self.question_index < len(self.questions):
            return self.questions[self.question_index]
        return None

    @property
    def can_advance(self) -> bool:
        return self.phase == SessionPhase.ANSWER_LOCKED

    @property
    def is_finished(self) -> bool:
        return self.phase in (SessionPhase.COMPLETED, SessionPhase.ABANDONED)


class SessionObserver:
    """Presentation hooks; every method is optional"""

    def on_question(self, state: SessionState) -> None:
        pass

    def on_tick(self, state: SessionState) -> None:
        pass

    def on_answer(self, state: SessionState, correct: Optional[bool]) -> None:
        pass

    def on_notification(self, notification: Notification) -> None:
        pass

    def on_complete(self, state: SessionState) -> None:
        pass


def present_options(question) -> List[str]:
    return [option for option in question.options if option and option.strip()]


class QuizSession:
    """
    State machine for one player taking one quiz.

    NOT_STARTED -> IN_PROGRESS -> ANSWER_LOCKED -> ... -> COMPLETED

    Each question gets a countdown; answering or running out of time locks the
    question, and ``advance`` moves on. Once the last question is passed the
    ``submitter`` callback receives the final state.
    """

    def __init__(
        self,
        observer: Optional[SessionObserver] = None,
        submitter: Optional[Callable[[SessionState], None]] = None,
        scheduler=None,
        time_limit: int = QUESTION_TIME_LIMIT,
    ):
        self.state = SessionState(time_left=time_limit)
        self.observer = observer or SessionObserver()
        self.submitter = submitter
        self.time_limit = time_limit
        # Timer threads call back into the session
        self._lock = threading.RLock()
        self._countdown = Countdown(
            on_tick=self._handle_tick,
            on_expire=self._handle_expire,
            scheduler=scheduler,
            duration=time_limit,
        )

    @property
    def countdown(self) -> Countdown:
        return self._countdown

    def start(self, quiz, questions: List[Any]) -> SessionState:
        if not questions:
            raise EmptyQuizError(getattr(quiz, "id", quiz))
        with self._lock:
            if self.state.phase not in (SessionPhase.NOT_STARTED,):
                raise InvalidTransitionError("Session has already been started")

            self.state.quiz = quiz
            self.state.questions = list(questions)
            self.state.score = 0
            logger.info(
                f"Starting quiz {self.state.quiz_id} with {len(questions)} questions"
            )
            return self.load_question(0)

    def load_question(self, index: int) -> SessionState:
        with self._lock:
            state = self.state
            self._countdown.cancel()
            state.question_index = index

            if index >= len(state.questions):
                return self._complete()

            state.generation += 1
            state.phase = SessionPhase.IN_PROGRESS
            state.answer_submitted = False
            state.selected_option = None
            state.options = present_options(state.questions[index])
            state.time_left = self.time_limit

            self.observer.on_question(state)
            self._countdown.start(state.generation)
            return state

    def select_answer(self, option_index: int) -> SessionState:
        with self._lock:
            return self._select_answer(option_index)

    def _select_answer(self, option_index: int) -> SessionState:
        state = self.state
        if state.phase != SessionPhase.IN_PROGRESS or state.answer_submitted:
            return state

        if isinstance(option_index, bool) or not isinstance(option_index, int):
            raise ValidationError("Option index must be an integer", field="option_index")
        if not 0 <= option_index < len(state.options):
            raise ValidationError(
                f"Option index must be between 0 and {len(state.options) - 1}",
                field="option_index",
            )

        self._countdown.cancel()
        state.answer_submitted = True
        state.selected_option = option_index
        state.phase = SessionPhase.ANSWER_LOCKED

        # correct_option is stored 1-based, selections are 0-based
        correct = option_index == state.current_question.correct_option - 1
        if correct:
            state.score += CORRECT_ANSWER_POINTS
            notification = Notification.success(
                "Correct!", f"You earned {CORRECT_ANSWER_POINTS} points"
            )
        else:
            state.score -= WRONG_ANSWER_PENALTY
            notification = Notification.error(
                "Incorrect!", f"You lost {WRONG_ANSWER_PENALTY} point"
            )

        self.observer.on_answer(state, correct)
        self.observer.on_notification(notification)
        return state

    def advance(self) -> SessionState:
        with self._lock:
            if self.state.phase != SessionPhase.ANSWER_LOCKED:
                raise InvalidTransitionError(
                    f"Cannot advance while session is {self.state.phase.value}"
                )
            return self.load_question(self.state.question_index + 1)

    def abandon(self) -> SessionState:
        with self._lock:
            self._countdown.cancel()
            if not self.state.is_finished:
                logger.info(f"Quiz {self.state.quiz_id} abandoned")
                self.state.phase = SessionPhase.ABANDONED
            return self.state

    def _complete(self) -> SessionState:
        state = self.state
        state.phase = SessionPhase.COMPLETED
        state.answer_submitted = False
        state.options = []
        logger.info(f"Quiz {state.quiz_id} completed with score {state.score}")

        self.observer.on_complete(state)
        if self.submitter is not None:
            self.submitter(state)
        return state

    def _handle_tick(self, generation: int, remaining: int) -> None:
        with self._lock:
            if generation != self.state.generation:
                return
            self.state.time_left = remaining
            self.observer.on_tick(self.state)

    def _handle_expire(self, generation: int) -> None:
        with self._lock:
            state = self.state
            if generation != state.generation or state.phase != SessionPhase.IN_PROGRESS:
                return

            # Timing out counts as an answer that scores nothing
            state.answer_submitted = True
            state.selected_option = None
            state.phase = SessionPhase.ANSWER_LOCKED
            self.observer.on_answer(state, None)
            self.observer.on_notification(
                Notification.info("Time Up!", "Moving to next question")
            )
