"""
Auth Routes

- POST /api/auth/signup : Create account, returns user + token
- POST /api/auth/signin : Sign in, returns user + token
- GET  /api/auth/me     : Current user (bearer token required)
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from thinksearch.db.database import get_session
from thinksearch.db.models import User
from thinksearch.models.schema import AuthResponse, MeResponse, SignInRequest, SignUpRequest, UserOut
from thinksearch.services.auth_service import AuthService, require_user_id

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=201)
def sign_up(request: SignUpRequest, session: Session = Depends(get_session)):
    """Create a new account and sign it in."""
    service = AuthService(session)
    try:
        user = service.sign_up(request)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return AuthResponse(user=UserOut.model_validate(user), token=service.create_token(user))


@router.post("/signin", response_model=AuthResponse)
def sign_in(request: SignInRequest, session: Session = Depends(get_session)):
    service = AuthService(session)
    user = service.sign_in(request.email, request.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    return AuthResponse(user=UserOut.model_validate(user), token=service.create_token(user))


@router.get("/me", response_model=MeResponse)
def me(user_id: str = Depends(require_user_id), session: Session = Depends(get_session)):
    user = session.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return MeResponse(user=UserOut.model_validate(user))
