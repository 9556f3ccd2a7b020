"""
Diary entry model.
"""
from sqlalchemy import Column, String, Text, ForeignKey, Integer, Index
from sqlalchemy.orm import relationship
from deardiary.db.base import BaseModel

CONTENT_MAX_LENGTH = 5000
AI_REPLY_MAX_LENGTH = 1000


class DiaryEntry(BaseModel):
    """A diary entry together with the AI reply it was saved with."""
    __tablename__ = "diary_entries"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    ai_reply = Column(String(AI_REPLY_MAX_LENGTH), nullable=False)

    # Relationships
    user = relationship("User", back_populates="diary_entries")

    # Owner listing is always newest-first
    __table_args__ = (
        Index("ix_diary_entries_user_created", "user_id", "created_at"),
    )
