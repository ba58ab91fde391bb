import logging
from typing import List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import StoreUnavailableError, ValidationError
from app.domain.quiz_domain import QuizDomain
from app.repositories.quiz_repository import QuizRepository
from app.schemas.quiz import QuestionResponse, QuizResponse

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class QuizService:
    """Quiz and question store used by players and the admin page"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = QuizRepository(db)

    def list_quizzes(self) -> List[QuizResponse]:
        try:
            quizzes = self.repository.get_all()
        except SQLAlchemyError as e:
            logger.error(f"❌ Fetch quizzes failed: {e}")
            raise StoreUnavailableError("Failed to fetch quizzes")
        return QuizDomain.to_response_list(quizzes)

    def get_questions(self, quiz_id: int) -> List[QuestionResponse]:
        """Questions of a quiz in insertion order; unknown quizzes have none"""
        try:
            questions = self.repository.get_questions(quiz_id)
        except SQLAlchemyError as e:
            logger.error(f"❌ Fetch questions failed for quiz {quiz_id}: {e}")
            raise StoreUnavailableError("Failed to fetch questions")
        return [QuizDomain.question_to_response(q) for q in questions]

    def create_quiz(
        self, title: str, description: Optional[str] = None, is_points_based: bool = True
    ) -> int:
        title = (title or "").strip()
        if not title:
            raise ValidationError("Quiz title is required", field="title")

        try:
            quiz = self.repository.create(
                {
                    "title": title,
                    "description": description,
                    "is_points_based": bool(is_points_based),
                }
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Create quiz failed: {e}")
            raise StoreUnavailableError("Failed to create quiz")

        logger.info(f"✅ Created quiz {quiz.id}: {title}")
        return quiz.id

    def add_question(
        self,
        quiz_id: int,
        question_text: str,
        options: Sequence[Optional[str]],
        correct_option: int,
    ) -> int:
        """
        Add a question to an existing quiz.

        Blank options are dropped and the remaining 2 to 4 are padded to the
        four option columns. ``correct_option`` is 1-based.
        """
        question_text = (question_text or "").strip()
        if not question_text:
            raise ValidationError("Question text is required", field="question_text")

        cleaned = QuizDomain.normalize_options(options or [])
        QuizDomain.validate_correct_option(correct_option, len(cleaned))

        try:
            if self.repository.get_by_id(quiz_id) is None:
                raise ValidationError(f"Quiz {quiz_id} does not exist", field="quiz_id")

            option1, option2, option3, option4 = QuizDomain.pad_options(cleaned)
            question = self.repository.create_question(
                {
                    "quiz_id": quiz_id,
                    "question_text": question_text,
                    "option1": option1,
                    "option2": option2,
                    "option3": option3,
                    "option4": option4,
                    "correct_option": correct_option,
                }
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Add question failed for quiz {quiz_id}: {e}")
            raise StoreUnavailableError("Failed to add question")

        logger.info(f"✅ Added question {question.id} to quiz {quiz_id}")
        return question.id
