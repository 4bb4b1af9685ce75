"""
Shared route dependencies.
"""
from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from budgetly.core.config import settings
from budgetly.core.security import decode_access_token
from budgetly.db.session import get_db
from budgetly.models.user import User


class NotAuthenticated(Exception):
    """No valid session on the request. Answered with a bare 401."""


def _session_token(request: Request) -> Optional[str]:
    """Token from the session cookie, falling back to a Bearer header."""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials
    return None


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    """The logged-in user, or None."""
    token = _session_token(request)
    if not token:
        return None

    payload = decode_access_token(token)
    if not payload or payload.get("user_id") is None:
        return None

    return db.query(User).filter(User.id == payload["user_id"]).first()


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """The logged-in user; raises NotAuthenticated otherwise."""
    if user is None:
        raise NotAuthenticated()
    return user
