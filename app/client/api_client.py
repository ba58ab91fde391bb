import logging
from typing import List, Optional, Sequence

import requests

from app.core.config import settings
from app.core.exceptions import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    StoreUnavailableError,
    ValidationError,
)
from app.schemas.leaderboard import GlobalLeaderboardEntry, QuizLeaderboardEntry
from app.schemas.quiz import QuestionResponse, QuizResponse
from app.schemas.score import ScoreResponse
from app.schemas.user import UserResponse

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _error_detail(response) -> str:
    try:
        detail = response.json().get("detail")
    except ValueError:
        return response.text or f"HTTP {response.status_code}"

    if isinstance(detail, list):
        # FastAPI request validation errors
        return "; ".join(
            f"{'.'.join(str(part) for part in item.get('loc', [])[1:])}: {item.get('msg')}"
            for item in detail
        )
    return str(detail) if detail else f"HTTP {response.status_code}"


class QuizApiClient:
    """HTTP client for the quiz API; every call carries a timeout"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"❌ {method} {path} failed: {e}")
            raise StoreUnavailableError("Network error") from e

        status_code = response.status_code
        if status_code >= 500:
            detail = _error_detail(response)
            logger.error(f"❌ {method} {path} returned {status_code}: {detail}")
            raise StoreUnavailableError(detail)
        if status_code == 401:
            raise InvalidCredentialsError()
        if status_code == 409:
            payload = kwargs.get("json") or {}
            raise DuplicateUsernameError(payload.get("username", ""))
        if status_code >= 400:
            raise ValidationError(_error_detail(response))

        return response.json()

    # Users

    def register(self, username: str, password: str) -> int:
        data = self._request(
            "POST", "/api/register", json={"username": username, "password": password}
        )
        return data["id"]

    def login(self, username: str, password: str) -> UserResponse:
        data = self._request(
            "POST", "/api/login", json={"username": username, "password": password}
        )
        return UserResponse(**data)

    # Quizzes

    def list_quizzes(self) -> List[QuizResponse]:
        return [QuizResponse(**item) for item in self._request("GET", "/api/quizzes")]

    def get_questions(self, quiz_id: int) -> List[QuestionResponse]:
        data = self._request("GET", f"/api/quizzes/{quiz_id}/questions")
        return [QuestionResponse(**item) for item in data]

    def create_quiz(
        self, title: str, description: Optional[str] = None, is_points_based: bool = True
    ) -> int:
        data = self._request(
            "POST",
            "/api/quizzes",
            json={
                "title": title,
                "description": description,
                "is_points_based": is_points_based,
            },
        )
        return data["id"]

    def add_question(
        self,
        quiz_id: int,
        question_text: str,
        options: Sequence[str],
        correct_option: int,
    ) -> int:
        data = self._request(
            "POST",
            "/api/questions",
            json={
                "quiz_id": quiz_id,
                "question_text": question_text,
                "options": list(options),
                "correct_option": correct_option,
            },
        )
        return data["id"]

    # Scores

    def submit_score(self, user_id: int, quiz_id: int, score: int) -> int:
        data = self._request(
            "POST",
            "/api/scores",
            json={"user_id": user_id, "quiz_id": quiz_id, "score": score},
        )
        return data["id"]

    def list_scores_by_user(self, user_id: int) -> List[ScoreResponse]:
        data = self._request("GET", f"/api/scores/user/{user_id}")
        return [ScoreResponse(**item) for item in data]

    def list_scores_by_quiz(self, quiz_id: int) -> List[ScoreResponse]:
        data = self._request("GET", f"/api/scores/quiz/{quiz_id}")
        return [ScoreResponse(**item) for item in data]

    def list_all_scores(self) -> List[ScoreResponse]:
        return [ScoreResponse(**item) for item in self._request("GET", "/api/scores")]

    # Leaderboards

    def global_leaderboard(self) -> List[GlobalLeaderboardEntry]:
        data = self._request("GET", "/api/leaderboard")
        return [GlobalLeaderboardEntry(**item) for item in data]

    def quiz_leaderboard(self, quiz_id: int) -> List[QuizLeaderboardEntry]:
        data = self._request("GET", f"/api/leaderboard/{quiz_id}")
        return [QuizLeaderboardEntry(**item) for item in data]
