"""
Tests for the quiz session state machine
"""

import pytest

from app.core.exceptions import EmptyQuizError, InvalidTransitionError, ValidationError
from app.domain.notification import NotificationKind
from app.domain.quiz_session import QuizSession, SessionObserver, SessionPhase
from app.schemas.quiz import QuestionResponse


def make_question(question_id, correct_option, options=None):
    return QuestionResponse(
        id=question_id,
        quiz_id=1,
        question_text=f"Question {question_id}",
        options=options or ["A", "B", "C", "D"],
        correct_option=correct_option,
    )


class RecordingObserver(SessionObserver):
    def __init__(self):
        self.notifications = []
        self.questions = []
        self.answers = []
        self.completed = []

    def on_question(self, state):
        self.questions.append(state.question_index)

    def on_answer(self, state, correct):
        self.answers.append(correct)

    def on_notification(self, notification):
        self.notifications.append(notification)

    def on_complete(self, state):
        self.completed.append(state.score)


class TestQuizSession:
    @pytest.fixture(autouse=True)
    def setup_session(self, scheduler):
        self.scheduler = scheduler
        self.observer = RecordingObserver()
        self.submitted = []
        self.session = QuizSession(
            observer=self.observer,
            submitter=lambda state: self.submitted.append((state.quiz_id, state.score)),
            scheduler=scheduler,
        )
        self.questions = [make_question(1, correct_option=2), make_question(2, correct_option=1)]

    def test_start_enters_first_question(self):
        state = self.session.start(7, self.questions)

        assert state.phase == SessionPhase.IN_PROGRESS
        assert state.question_index == 0
        assert state.score == 0
        assert state.time_left == 30
        assert state.options == ["A", "B", "C", "D"]
        assert len(self.scheduler.pending) == 1

    def test_start_empty_quiz_fails_without_session(self):
        with pytest.raises(EmptyQuizError):
            self.session.start(7, [])

        assert self.session.state.phase == SessionPhase.NOT_STARTED
        assert self.session.state.questions == []
        assert self.scheduler.pending == []

    def test_correct_answer_awards_ten(self):
        self.session.start(7, self.questions)

        state = self.session.select_answer(1)

        assert state.score == 10
        assert state.phase == SessionPhase.ANSWER_LOCKED
        assert self.observer.answers == [True]
        assert self.observer.notifications[-1].kind == NotificationKind.SUCCESS
        assert self.observer.notifications[-1].title == "Correct!"

    def test_wrong_answer_costs_one(self):
        self.session.start(7, self.questions)

        state = self.session.select_answer(0)

        assert state.score == -1
        assert self.observer.notifications[-1].kind == NotificationKind.ERROR
        assert self.observer.notifications[-1].title == "Incorrect!"

    def test_select_answer_is_idempotent(self):
        self.session.start(7, self.questions)

        self.session.select_answer(1)
        self.session.select_answer(0)
        state = self.session.select_answer(1)

        assert state.score == 10
        assert state.selected_option == 1
        assert len(self.observer.answers) == 1

    def test_answer_cancels_countdown(self):
        self.session.start(7, self.questions)

        self.session.select_answer(1)
        self.scheduler.advance(60)

        assert self.session.state.time_left == 30
        assert self.session.state.phase == SessionPhase.ANSWER_LOCKED
        assert len(self.observer.notifications) == 1

    def test_out_of_range_option_rejected(self):
        self.session.start(7, [make_question(1, correct_option=1, options=["Yes", "No"])])

        with pytest.raises(ValidationError):
            self.session.select_answer(2)

        assert self.session.state.phase == SessionPhase.IN_PROGRESS
        assert self.session.state.score == 0

    def test_blank_options_are_not_presented(self):
        question = make_question(1, correct_option=2, options=["Yes", "No", "", "  "])

        state = self.session.start(7, [question])

        assert state.options == ["Yes", "No"]

    def test_timeout_locks_without_score_change(self):
        self.session.start(7, self.questions)

        self.scheduler.advance(30)

        state = self.session.state
        assert state.score == 0
        assert state.time_left == 0
        assert state.answer_submitted
        assert state.can_advance
        assert self.observer.answers == [None]
        assert self.observer.notifications[-1].kind == NotificationKind.INFO
        assert self.observer.notifications[-1].title == "Time Up!"

    def test_answer_after_timeout_is_ignored(self):
        self.session.start(7, self.questions)
        self.scheduler.advance(30)

        state = self.session.select_answer(1)

        assert state.score == 0

    def test_advance_requires_locked_question(self):
        self.session.start(7, self.questions)

        with pytest.raises(InvalidTransitionError):
            self.session.advance()

    def test_advance_loads_next_question_with_fresh_countdown(self):
        self.session.start(7, self.questions)
        self.scheduler.advance(5)
        self.session.select_answer(1)

        state = self.session.advance()

        assert state.question_index == 1
        assert state.phase == SessionPhase.IN_PROGRESS
        assert not state.answer_submitted
        assert state.time_left == 30
        assert self.observer.questions == [0, 1]

    def test_stale_timer_does_not_touch_next_question(self):
        self.session.start(7, self.questions)
        stale = self.scheduler.pending[0]
        self.session.select_answer(1)
        self.session.advance()

        stale.callback()

        assert self.session.state.time_left == 30
        assert self.session.state.phase == SessionPhase.IN_PROGRESS

    def test_completion_submits_final_score(self):
        self.session.start(7, self.questions)
        self.session.select_answer(1)  # correct
        self.session.advance()
        self.session.select_answer(3)  # wrong

        state = self.session.advance()

        assert state.phase == SessionPhase.COMPLETED
        assert state.score == 9
        assert self.submitted == [(7, 9)]
        assert self.observer.completed == [9]
        assert self.scheduler.pending == []

    def test_timeout_then_completion(self):
        self.session.start(7, [make_question(1, correct_option=1)])
        self.scheduler.advance(30)

        state = self.session.advance()

        assert state.phase == SessionPhase.COMPLETED
        assert self.submitted == [(7, 0)]

    def test_abandon_cancels_and_skips_submit(self):
        self.session.start(7, self.questions)

        state = self.session.abandon()
        self.session.abandon()
        self.scheduler.advance(60)

        assert state.phase == SessionPhase.ABANDONED
        assert self.submitted == []
        assert self.observer.notifications == []
