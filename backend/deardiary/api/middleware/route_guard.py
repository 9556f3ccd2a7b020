"""
Route guard for page requests.

Runs before every request. Protected pages need a valid session cookie,
login and signup pages send an already signed-in user to the diary, and
API routes are left alone because they authenticate themselves.
"""
import logging
from typing import Optional
from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from deardiary.core.exceptions import AuthenticationError
from deardiary.core.security import SessionTokenCodec

logger = logging.getLogger(__name__)

API_PREFIX = "/api/"
PROTECTED_PREFIXES = ("/diary", "/settings")
PUBLIC_AUTH_PATHS = ("/login", "/signup")
LOGIN_PATH = "/login"
HOME_PATH = "/diary"


def has_valid_token(token: Optional[str], codec: SessionTokenCodec) -> bool:
    """Verification failures count as no token."""
    if not token:
        return False
    try:
        codec.verify(token)
    except AuthenticationError:
        return False
    return True


def evaluate_route(path: str, token: Optional[str], codec: SessionTokenCodec) -> Optional[str]:
    """
    Decide where a request should go.

    Returns the redirect target, or None to let the request through.
    """
    if path.startswith(API_PREFIX):
        return None

    is_protected = path.startswith(PROTECTED_PREFIXES)
    is_public_auth = path in PUBLIC_AUTH_PATHS
    if not is_protected and not is_public_auth:
        return None

    signed_in = has_valid_token(token, codec)
    if is_protected and not signed_in:
        return LOGIN_PATH
    if is_public_auth and signed_in:
        return HOME_PATH
    return None


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Redirects page requests according to evaluate_route."""

    def __init__(self, app, codec: SessionTokenCodec, cookie_name: str = "token"):
        super().__init__(app)
        self.codec = codec
        self.cookie_name = cookie_name

    async def dispatch(self, request: Request, call_next):
        target = evaluate_route(
            request.url.path,
            request.cookies.get(self.cookie_name),
            self.codec,
        )
        if target is not None:
            logger.debug("Redirecting %s to %s", request.url.path, target)
            return RedirectResponse(url=target, status_code=307)
        return await call_next(request)
