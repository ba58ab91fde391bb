from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./quiz.db"
    PROJECT_NAME: str = "Quiz Arena"

    # Frontend origins allowed by CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Password hashing
    BCRYPT_ROUNDS: int = 10

    # Leaderboard
    LEADERBOARD_EXCLUDED_USERNAME: str = "testuser"
    LEADERBOARD_LIMIT: int = 10

    # Client
    API_BASE_URL: str = "http://localhost:8000"
    HTTP_TIMEOUT_SECONDS: float = 10.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
