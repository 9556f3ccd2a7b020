"""
Pydantic schemas for Diary entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class DiaryEntryCreate(BaseModel):
    """Schema for diary entry creation."""
    content: Optional[str] = None
    openai_api_key: Optional[str] = Field(default=None, alias="openaiApiKey")

    class Config:
        populate_by_name = True


class DiaryEntryResponse(BaseModel):
    """Schema for diary entry response. The owner is implicit and not returned."""
    id: int
    content: str
    ai_reply: str = Field(alias="aiReply")
    created_at: datetime = Field(alias="createdAt")

    class Config:
        populate_by_name = True


class DiaryEntryEnvelope(BaseModel):
    entry: DiaryEntryResponse


class DiaryEntryList(BaseModel):
    entries: List[DiaryEntryResponse]


class DiaryDates(BaseModel):
    """Distinct local calendar dates (YYYY-MM-DD) with at least one entry."""
    dates: List[str]
