"""
Domain errors raised by services and translated to HTTP responses at the boundary.

Every error carries the message shown to the end user and the status code the
API answers with. Services never raise HTTPException directly.
"""
from typing import Optional


class DiaryError(Exception):
    """Base exception for Dear Diary errors."""

    status_code = 500
    default_message = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DiaryError):
    """Malformed or missing input."""
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(DiaryError):
    """Caller is not (or no longer) authenticated."""
    status_code = 401
    default_message = "Please log in to continue"


class InvalidTokenError(AuthenticationError):
    """Session token has a bad signature or is malformed."""
    default_message = "Your session has expired. Please log in again"


class ExpiredTokenError(AuthenticationError):
    """Session token is past its expiry."""
    default_message = "Your session has expired. Please log in again"


class AIKeyError(DiaryError):
    """The caller's AI key was rejected or has no remaining quota."""
    status_code = 402
    default_message = "Invalid OpenAI API key. Please check your API key and try again."


class NotFoundError(DiaryError):
    """Resource not found."""
    status_code = 404
    default_message = "Not found"


class ConflictError(DiaryError):
    """A unique value is already taken."""
    status_code = 409
    default_message = "Already exists"


class UpstreamTransportError(DiaryError):
    """The AI service could not be reached or failed on its side."""
    status_code = 500
    default_message = "OpenAI service temporarily unavailable. Please try again later."


class UnknownError(DiaryError):
    """Generic fallback."""
    status_code = 500
    default_message = "Unable to generate AI response. Please try again."
