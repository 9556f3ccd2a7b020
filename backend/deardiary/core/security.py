"""
Security utilities for session tokens and password hashing.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional
import hashlib
import logging
import bcrypt
from jose import JWTError, jwt
from deardiary.core.config import settings
from deardiary.core.exceptions import ExpiredTokenError, InvalidTokenError

logger = logging.getLogger(__name__)


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    Returns bytes (32 bytes) which is well under bcrypt's 72-byte limit.
    """
    return hashlib.sha256(password.encode("utf-8")).digest()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pre_hashed = _pre_hash_password(plain_password)
    return bcrypt.checkpw(pre_hashed, hashed_password.encode("utf-8"))


def get_password_hash(password: str) -> str:
    """
    Hash a password with a fresh bcrypt salt.
    Cost is taken from settings.BCRYPT_ROUNDS (12 by default).
    """
    pre_hashed = _pre_hash_password(password)
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pre_hashed, salt).decode("utf-8")


@dataclass(frozen=True)
class TokenConfig:
    """Signing parameters for session tokens."""
    secret_key: str
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(days=7)


class SessionTokenCodec:
    """
    Issues and verifies signed, time-limited session tokens.

    A token is a JWT carrying the user id as ``sub`` plus ``iat`` and ``exp``.
    Nothing is stored server-side, so a token stays valid until it expires.
    """

    def __init__(self, config: TokenConfig):
        self._config = config

    @property
    def ttl(self) -> timedelta:
        return self._config.ttl

    def issue(self, user_id: int, now: Optional[datetime] = None) -> str:
        """Create a token for user_id expiring ttl after now."""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._config.ttl).timestamp()),
        }
        return jwt.encode(claims, self._config.secret_key, algorithm=self._config.algorithm)

    def verify(self, token: str, now: Optional[datetime] = None) -> int:
        """
        Verify a token and return the user id it was issued for.

        Raises InvalidTokenError for a bad signature or malformed token and
        ExpiredTokenError once the expiry has passed.
        """
        if not token:
            raise InvalidTokenError()
        try:
            # Expiry is checked below so that callers can pass their own clock
            claims = jwt.decode(
                token,
                self._config.secret_key,
                algorithms=[self._config.algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as e:
            logger.info("Session token rejected: invalid (%s)", type(e).__name__)
            raise InvalidTokenError()

        expires_at = claims.get("exp")
        if not isinstance(expires_at, (int, float)):
            logger.info("Session token rejected: missing expiry")
            raise InvalidTokenError()
        current = now or datetime.now(timezone.utc)
        if current.timestamp() > expires_at:
            logger.info("Session token rejected: expired")
            raise ExpiredTokenError()

        try:
            return int(claims["sub"])
        except (KeyError, TypeError, ValueError):
            logger.info("Session token rejected: malformed subject")
            raise InvalidTokenError()


@lru_cache
def get_token_codec() -> SessionTokenCodec:
    """Build the process-wide codec from settings."""
    return SessionTokenCodec(
        TokenConfig(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            ttl=timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS),
        )
    )
