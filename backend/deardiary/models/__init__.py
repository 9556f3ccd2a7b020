"""Models package - Import all models for SQLAlchemy registration."""
from deardiary.models.user import User
from deardiary.models.diary import DiaryEntry

__all__ = [
    "User",
    "DiaryEntry",
]
