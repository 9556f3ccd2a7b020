"""
Diary routes: write an entry, list entries, list calendar dates.
"""
from datetime import timezone
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from deardiary.db.session import get_db
from deardiary.core.config import settings
from deardiary.core.utils import parse_date, resolve_timezone, to_local
from deardiary.models.diary import DiaryEntry
from deardiary.schemas.diary import (
    DiaryDates, DiaryEntryCreate, DiaryEntryEnvelope, DiaryEntryList, DiaryEntryResponse
)
from deardiary.services import diary_service
from deardiary.services.diary_service import ReplyGenerator
from deardiary.api.dependencies import get_current_user_id, get_reply_generator

router = APIRouter(prefix="/diary", tags=["diary"])


def to_entry_response(entry: DiaryEntry) -> DiaryEntryResponse:
    """Project an entry for the client; the owner id is left out."""
    return DiaryEntryResponse(
        id=entry.id,
        content=entry.content,
        ai_reply=entry.ai_reply,
        created_at=to_local(entry.created_at, timezone.utc),
    )


@router.get("", response_model=DiaryEntryList)
async def get_entries(
    date: Optional[str] = Query(None, description="Only entries written on this day (YYYY-MM-DD)"),
    tz: Optional[str] = Query(None, description="IANA time zone for the date filter"),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get the caller's entries, newest first."""
    on_date = parse_date(date) if date else None
    zone = resolve_timezone(tz or settings.DIARY_TIMEZONE)
    entries = diary_service.list_entries(user_id, db, on_date=on_date, tz=zone)
    return DiaryEntryList(entries=[to_entry_response(e) for e in entries])


@router.post("", response_model=DiaryEntryEnvelope, status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_data: DiaryEntryCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    reply_generator: ReplyGenerator = Depends(get_reply_generator),
):
    """Write a diary entry; it is saved only once the AI reply has been generated."""
    entry = await diary_service.create_entry(
        user_id,
        entry_data.content,
        entry_data.openai_api_key,
        db,
        reply_generator=reply_generator,
    )
    return DiaryEntryEnvelope(entry=to_entry_response(entry))


@router.get("/dates", response_model=DiaryDates)
async def get_entry_dates(
    tz: Optional[str] = Query(None, description="IANA time zone used to group entries by day"),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get the distinct days with entries, for calendar highlighting."""
    zone = resolve_timezone(tz or settings.DIARY_TIMEZONE)
    return DiaryDates(dates=diary_service.list_entry_dates(user_id, db, tz=zone))
