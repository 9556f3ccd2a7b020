"""
Authentication routes for registration, login, logout and identity lookup.
"""
from datetime import timezone
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from deardiary.db.session import get_db
from deardiary.core.config import settings
from deardiary.core.exceptions import ValidationError
from deardiary.core.security import SessionTokenCodec, get_token_codec
from deardiary.core.utils import to_local
from deardiary.models.user import User
from deardiary.schemas.user import (
    MessageResponse, UserCreate, UserEnvelope, UserLogin, UserResponse
)
from deardiary.services import user_service
from deardiary.api.dependencies import get_current_user_id

router = APIRouter(prefix="/auth", tags=["auth"])


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        created_at=to_local(user.created_at, timezone.utc),
    )


def set_session_cookie(response: Response, token: str, codec: SessionTokenCodec) -> None:
    """Attach the session token as an HTTP-only cookie."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(codec.ttl.total_seconds()),
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )


@router.post("/register", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    response: Response,
    db: Session = Depends(get_db),
    codec: SessionTokenCodec = Depends(get_token_codec),
):
    """Register a new user and start a session."""
    user = user_service.register_user(user_data.email, user_data.name, user_data.password, db)
    set_session_cookie(response, codec.issue(user.id), codec)
    return UserEnvelope(user=to_user_response(user))


@router.post("/login", response_model=UserEnvelope)
async def login(
    credentials: UserLogin,
    response: Response,
    db: Session = Depends(get_db),
    codec: SessionTokenCodec = Depends(get_token_codec),
):
    """Check credentials and start a session."""
    if not credentials.email or not credentials.password:
        raise ValidationError("Email and password are required")

    user = user_service.verify_credentials(credentials.email, credentials.password, db)
    set_session_cookie(response, codec.issue(user.id), codec)
    return UserEnvelope(user=to_user_response(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """Logout by clearing the session cookie; there is no server-side session."""
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserEnvelope)
async def me(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get current user information."""
    user = user_service.get_user_by_id(user_id, db)
    return UserEnvelope(user=to_user_response(user))
