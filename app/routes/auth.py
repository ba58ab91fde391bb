from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    StoreUnavailableError,
    ValidationError,
)
from app.schemas.user import UserCreate, UserCreatedResponse, UserLogin, UserResponse
from app.services.auth import AuthService

router = APIRouter(prefix="/api", tags=["auth"])


@router.post(
    "/register",
    response_model=UserCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(request: UserCreate, db: Session = Depends(get_db)):
    """Register a new user and return its id"""
    try:
        service = AuthService(db)
        return UserCreatedResponse(id=service.register(request.username, request.password))
    except DuplicateUsernameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.post("/login", response_model=UserResponse, status_code=status.HTTP_200_OK)
def login(request: UserLogin, db: Session = Depends(get_db)):
    """
    Check credentials and return the user without its password hash

    Unknown usernames and wrong passwords both answer 401 with the same message.
    """
    try:
        service = AuthService(db)
        return UserResponse.model_validate(
            service.authenticate(request.username, request.password)
        )
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
