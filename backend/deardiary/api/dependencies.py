"""
Shared request dependencies.
"""
from fastapi import Depends, Request
from deardiary.core.config import settings
from deardiary.core.exceptions import AuthenticationError
from deardiary.core.security import SessionTokenCodec, get_token_codec
from deardiary.services.ai_reply_service import generate_reply
from deardiary.services.diary_service import ReplyGenerator


def get_session_token(request: Request) -> str:
    """Read the session cookie; missing cookie means not logged in."""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        raise AuthenticationError()
    return token


def get_current_user_id(
    token: str = Depends(get_session_token),
    codec: SessionTokenCodec = Depends(get_token_codec),
) -> int:
    """
    Verify the session cookie and return the caller's user id.

    API routes verify on their own, independently of the route guard.
    """
    return codec.verify(token)


def get_reply_generator() -> ReplyGenerator:
    """Coroutine function used to produce diary replies."""
    return generate_reply
