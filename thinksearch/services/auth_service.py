"""
Auth Service - Accounts and bearer tokens

Handles sign-up / sign-in against the users table and issues HS256 JWTs
carrying the user id. `verify_token` never raises: an invalid, expired or
missing token simply yields None.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import logfire
from fastapi import Depends, Header, HTTPException
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from thinksearch.config import JWT_ALGORITHM, TOKEN_TTL_DAYS, get_settings
from thinksearch.db.database import session_scope
from thinksearch.db.models import User
from thinksearch.models.schema import SignUpRequest


class AuthService:
    """Account creation, credential checks and token handling."""

    def __init__(self, session: Session, secret: Optional[str] = None):
        self.session = session
        self.secret = secret or get_settings().jwt_secret

    def sign_up(self, request: SignUpRequest) -> User:
        """Create an account; ValueError when email or username is taken."""
        conditions = [User.email == request.email]
        if request.username:
            conditions.append(User.username == request.username)
        if self.session.scalar(select(User).where(or_(*conditions))) is not None:
            raise ValueError("User with this email or username already exists")

        user = User(
            email=request.email,
            display_name=request.display_name,
            username=request.username,
        )
        user.set_password(request.password)
        try:
            with session_scope(self.session):
                self.session.add(user)
        except IntegrityError as exc:
            raise ValueError("User with this email or username already exists") from exc

        logfire.info("User signed up {user_id}", user_id=user.id)
        return user

    def sign_in(self, email: str, password: str) -> Optional[User]:
        """The matching user, or None on bad credentials."""
        user = self.session.scalar(select(User).where(User.email == email.strip().lower()))
        if user is None or not user.check_password(password):
            return None
        return user

    def create_token(self, user: User) -> str:
        return create_token(user.id, user.email, self.secret)


def create_token(user_id: str, email: str, secret: str) -> str:
    payload = {
        "userId": user_id,
        "email": email,
        "exp": datetime.now(timezone.utc) + timedelta(days=TOKEN_TTL_DAYS),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def verify_token(token: Optional[str], secret: str) -> Optional[str]:
    """User id asserted by a valid token, else None."""
    if not token:
        return None
    try:
        decoded = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None
    user_id = decoded.get("userId")
    return user_id if isinstance(user_id, str) else None


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user_id(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """FastAPI dependency: user id from the bearer token, or None."""
    return verify_token(bearer_token(authorization), get_settings().jwt_secret)


def require_user_id(user_id: Optional[str] = Depends(get_current_user_id)) -> str:
    """FastAPI dependency: user id, or 401."""
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user_id
