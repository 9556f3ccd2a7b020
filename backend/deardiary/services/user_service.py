"""
User service: registration, credential checks and identity lookup.
"""
import logging
import re
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from deardiary.core.exceptions import (
    AuthenticationError, ConflictError, NotFoundError, ValidationError
)
from deardiary.core.security import get_password_hash, verify_password
from deardiary.models.user import User

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PASSWORD_MIN_LENGTH = 6
INVALID_CREDENTIALS = "Invalid email or password"


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively."""
    return email.strip().lower()


def validate_registration(email: Optional[str], name: Optional[str], password: Optional[str]) -> None:
    """Raise ValidationError if registration input is unusable."""
    if not email or not password or not name:
        raise ValidationError("All fields are required")
    if not EMAIL_PATTERN.fullmatch(email):
        raise ValidationError("Please enter a valid email address")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if not name.strip():
        raise ValidationError("Name is required")


def get_user_by_email(email: str, db: Session) -> Optional[User]:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def register_user(email: str, name: str, raw_password: str, db: Session) -> User:
    """Create a new user with a bcrypt-hashed password."""
    validate_registration(email, name, raw_password)

    if get_user_by_email(email, db):
        raise ConflictError("Email already exists")

    user = User(
        email=normalize_email(email),
        name=name.strip(),
        hashed_password=get_password_hash(raw_password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        db.rollback()
        raise ConflictError("Email already exists")
    db.refresh(user)

    logger.info("Registered user %s", user.id)
    return user


def verify_credentials(email: str, raw_password: str, db: Session) -> User:
    """
    Return the user owning these credentials.

    A missing user and a wrong password raise the same AuthenticationError.
    """
    user = get_user_by_email(email, db) if email else None
    if not user or not raw_password or not verify_password(raw_password, user.hashed_password):
        raise AuthenticationError(INVALID_CREDENTIALS)
    return user


def get_user_by_id(user_id: int, db: Session) -> User:
    """Get user by ID."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user
