import logging

import bcrypt
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    StoreUnavailableError,
    ValidationError,
)
from app.models.user import User
from app.repositories.user_repository import UserRepository

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class AuthService:
    """User store: registration and credential checks"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = UserRepository(db)

    def register(self, username: str, password: str) -> int:
        """Create a user and return its id"""
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required", field="username")
        if not password:
            raise ValidationError("Password is required", field="password")

        try:
            if self.repository.get_by_username(username):
                raise DuplicateUsernameError(username)
            user = self.repository.create(
                {"username": username, "password": hash_password(password)}
            )
        except IntegrityError:
            self.db.rollback()
            raise DuplicateUsernameError(username)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Registration failed for {username}: {e}")
            raise StoreUnavailableError("Failed to register user")

        logger.info(f"✅ Registered user {username} (id={user.id})")
        return user.id

    def authenticate(self, username: str, password: str) -> User:
        """Return the user for valid credentials, never revealing which part was wrong"""
        try:
            user = self.repository.get_by_username((username or "").strip())
        except SQLAlchemyError as e:
            logger.error(f"❌ Login lookup failed for {username}: {e}")
            raise StoreUnavailableError("Failed to login")

        if user is None or not password or not verify_password(password, user.password):
            logger.info(f"Rejected login for {username}")
            raise InvalidCredentialsError()

        logger.info(f"User {username} logged in")
        return user
