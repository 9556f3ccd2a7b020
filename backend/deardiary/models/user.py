"""
User model for authentication.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from deardiary.db.base import BaseModel


class User(BaseModel):
    """Registered diary owner. Email is stored lower-cased."""
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    hashed_password = Column(String(255), nullable=False)

    # Relationships
    diary_entries = relationship("DiaryEntry", back_populates="user")
