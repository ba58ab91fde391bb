from typing import List, Optional, Sequence

from app.core.exceptions import ValidationError
from app.models.quiz import Question, Quiz
from app.schemas.quiz import QuestionResponse, QuizResponse

MIN_OPTIONS = 2
MAX_OPTIONS = 4


class QuizDomain:
    """Domain logic for Quiz and Question entities"""

    @staticmethod
    def to_response(quiz: Quiz) -> QuizResponse:
        return QuizResponse.model_validate(quiz)

    @staticmethod
    def to_response_list(quizzes: List[Quiz]) -> List[QuizResponse]:
        return [QuizDomain.to_response(quiz) for quiz in quizzes]

    @staticmethod
    def present_options(question: Question) -> List[str]:
        """Non-empty options in storage order, as shown to the player"""
        stored = [question.option1, question.option2, question.option3, question.option4]
        return [option for option in stored if option is not None and option.strip()]

    @staticmethod
    def question_to_response(question: Question) -> QuestionResponse:
        return QuestionResponse(
            id=question.id,
            quiz_id=question.quiz_id,
            question_text=question.question_text,
            options=QuizDomain.present_options(question),
            correct_option=question.correct_option,
        )

    @staticmethod
    def normalize_options(options: Sequence[Optional[str]]) -> List[str]:
        """
        Trim the submitted options and drop the blank ones.

        Raises ValidationError unless 2 to 4 options remain.
        """
        cleaned = [option.strip() for option in options if option and option.strip()]
        if len(cleaned) < MIN_OPTIONS:
            raise ValidationError("Please provide at least 2 options", field="options")
        if len(cleaned) > MAX_OPTIONS:
            raise ValidationError("A question can have at most 4 options", field="options")
        return cleaned

    @staticmethod
    def pad_options(options: List[str]) -> List[Optional[str]]:
        """Pad to the four option columns with None"""
        return list(options) + [None] * (MAX_OPTIONS - len(options))

    @staticmethod
    def validate_correct_option(correct_option: int, option_count: int) -> None:
        if isinstance(correct_option, bool) or not isinstance(correct_option, int):
            raise ValidationError(
                "Correct option must be an integer", field="correct_option"
            )
        if not 1 <= correct_option <= option_count:
            raise ValidationError(
                f"Correct option must be between 1 and {option_count}",
                field="correct_option",
            )
