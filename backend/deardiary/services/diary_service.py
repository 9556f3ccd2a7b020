"""
Diary service for diary-related business logic.

An entry is only ever written together with its AI reply: the reply is
requested first and nothing is stored if that fails.
"""
import logging
from datetime import date, tzinfo
from typing import Awaitable, Callable, List, Optional
from sqlalchemy.orm import Session
from deardiary.core.exceptions import (
    AIKeyError, DiaryError, UnknownError, UpstreamTransportError, ValidationError
)
from deardiary.core.utils import local_date_string, to_local
from deardiary.models.diary import AI_REPLY_MAX_LENGTH, CONTENT_MAX_LENGTH, DiaryEntry
from deardiary.services.ai_reply_service import (
    AIReplyError, ReplyFailure, generate_reply
)

logger = logging.getLogger(__name__)

ReplyGenerator = Callable[[str, str], Awaitable[str]]

# Every ReplyFailure must have an entry here
FAILURE_ERRORS = {
    ReplyFailure.INVALID_KEY: AIKeyError,
    ReplyFailure.QUOTA_EXCEEDED: AIKeyError,
    ReplyFailure.UPSTREAM_UNAVAILABLE: UpstreamTransportError,
    ReplyFailure.NETWORK_ERROR: UpstreamTransportError,
    ReplyFailure.EMPTY_RESPONSE: UnknownError,
    ReplyFailure.UNKNOWN: UnknownError,
}


def reply_failure_to_error(error: AIReplyError) -> DiaryError:
    """Translate a reply failure into the error reported to the caller."""
    error_class = FAILURE_ERRORS[error.kind]
    if error_class is UnknownError:
        return UnknownError()
    return error_class(error.message)


def utf16_length(text: str) -> int:
    """Length in UTF-16 code units, the unit the entry limit is defined in."""
    return len(text.encode("utf-16-le")) // 2


def validate_entry(content: Optional[str], api_key: Optional[str]) -> str:
    """Return trimmed content or raise ValidationError."""
    if not content or not content.strip():
        raise ValidationError("Please write something before submitting")
    if not api_key or not api_key.strip():
        raise ValidationError("OpenAI API key is required to generate AI responses")
    trimmed = content.strip()
    if utf16_length(trimmed) > CONTENT_MAX_LENGTH:
        raise ValidationError(
            f"Entry content is too long. Maximum {CONTENT_MAX_LENGTH} characters allowed."
        )
    return trimmed


async def create_entry(
    user_id: int,
    content: Optional[str],
    api_key: Optional[str],
    db: Session,
    reply_generator: ReplyGenerator = generate_reply,
) -> DiaryEntry:
    """
    Create a diary entry with an AI reply.

    Args:
        user_id: Authenticated owner
        content: Raw entry text
        api_key: Caller's OpenAI key, used for this request only
        db: Database session
        reply_generator: Coroutine function producing the reply

    Raises:
        ValidationError: content or key unusable
        AIKeyError: key rejected or out of quota
        UpstreamTransportError: service unreachable or failing
        UnknownError: anything else went wrong getting a reply
    """
    trimmed = validate_entry(content, api_key)

    try:
        ai_reply = await reply_generator(trimmed, api_key.strip())
    except AIReplyError as e:
        logger.warning("No AI reply for user %s: %s", user_id, e.kind.value)
        raise reply_failure_to_error(e)

    if not ai_reply or not ai_reply.strip():
        raise UnknownError()

    diary_entry = DiaryEntry(
        user_id=user_id,
        content=trimmed,
        ai_reply=ai_reply.strip()[:AI_REPLY_MAX_LENGTH],
    )
    db.add(diary_entry)
    db.commit()
    db.refresh(diary_entry)

    logger.info("Created diary entry %s for user %s", diary_entry.id, user_id)
    return diary_entry


def get_entries_for_user(user_id: int, db: Session) -> List[DiaryEntry]:
    """All entries of a user, newest first."""
    return db.query(DiaryEntry).filter(
        DiaryEntry.user_id == user_id
    ).order_by(DiaryEntry.created_at.desc(), DiaryEntry.id.desc()).all()


def list_entries(
    user_id: int,
    db: Session,
    on_date: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> List[DiaryEntry]:
    """
    List a user's entries newest first.

    With on_date, only entries written on that local calendar day are returned.
    """
    entries = get_entries_for_user(user_id, db)
    if on_date is None:
        return entries
    return [e for e in entries if to_local(e.created_at, tz).date() == on_date]


def list_entry_dates(user_id: int, db: Session, tz: Optional[tzinfo] = None) -> List[str]:
    """Distinct local dates (YYYY-MM-DD) with at least one entry, ascending."""
    rows = db.query(DiaryEntry.created_at).filter(
        DiaryEntry.user_id == user_id
    ).all()
    return sorted({local_date_string(row[0], tz) for row in rows})
