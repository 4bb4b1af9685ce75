"""
Authentication routes for registration, login, and logout.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from budgetly.core.config import settings
from budgetly.core.security import verify_password, get_password_hash, create_session_token
from budgetly.db.session import get_db
from budgetly.models.user import User
from budgetly.schemas.user import UserCreate, UserLogin, UserResponse
from budgetly.api.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def set_session_cookie(response: Response, user: User) -> None:
    """Attach a fresh session token for the user to the response."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token(user.id, user.username),
        max_age=settings.ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


def authenticate(username: str, password: str, db: Session):
    """Return the user for valid credentials, else None."""
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, response: Response, db: Session = Depends(get_db)):
    """Register a new user and start a session."""
    existing_user = db.query(User).filter(User.username == user_data.username).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists"
        )

    new_user = User(
        username=user_data.username,
        hashed_password=get_password_hash(user_data.password)
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info(f"Registered user {new_user.id} ({new_user.username})")

    set_session_cookie(response, new_user)
    return new_user


@router.post("/login", response_model=UserResponse)
async def login(credentials: UserLogin, response: Response, db: Session = Depends(get_db)):
    """Login and start a session."""
    user = authenticate(credentials.username, credentials.password, db)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password"
        )

    set_session_cookie(response, user)
    return user


@router.post("/logout")
async def logout(response: Response):
    """End the session by clearing its cookie."""
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}


@router.get("/user", response_model=UserResponse)
async def get_user(current_user: User = Depends(get_current_user)):
    """Get the logged-in user."""
    return current_user
