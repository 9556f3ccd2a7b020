"""
Tests for the diary entry pipeline.
"""
from datetime import datetime, timezone
import pytest
from conftest import FAKE_REPLY, FakeReplyGenerator
from deardiary.core.exceptions import (
    AIKeyError, UnknownError, UpstreamTransportError, ValidationError
)
from deardiary.services import diary_service, user_service
from deardiary.services.ai_reply_service import AIReplyError, ReplyFailure


@pytest.fixture
def user(db):
    return user_service.register_user("writer@example.com", "Writer", "secret123", db)


@pytest.fixture
def other_user(db):
    return user_service.register_user("other@example.com", "Other", "secret123", db)


def test_failure_mapping_covers_every_kind():
    assert set(diary_service.FAILURE_ERRORS) == set(ReplyFailure)


@pytest.mark.asyncio
async def test_create_entry_persists_reply(db, user):
    generator = FakeReplyGenerator()
    entry = await diary_service.create_entry(user.id, "hello", "sk-test", db, reply_generator=generator)

    assert entry.ai_reply == FAKE_REPLY
    entries = diary_service.list_entries(user.id, db)
    assert [e.id for e in entries] == [entry.id]
    assert entries[0].ai_reply == "You are not alone."


@pytest.mark.asyncio
async def test_new_entry_is_listed_first(db, user):
    generator = FakeReplyGenerator()
    await diary_service.create_entry(user.id, "one", "sk-test", db, reply_generator=generator)
    latest = await diary_service.create_entry(user.id, "two", "sk-test", db, reply_generator=generator)
    assert diary_service.list_entries(user.id, db)[0].id == latest.id


@pytest.mark.asyncio
async def test_empty_content_writes_nothing(db, user):
    generator = FakeReplyGenerator()
    with pytest.raises(ValidationError):
        await diary_service.create_entry(user.id, "", "sk-test", db, reply_generator=generator)
    assert generator.calls == []
    assert diary_service.list_entries(user.id, db) == []


@pytest.mark.asyncio
async def test_missing_key_writes_nothing(db, user):
    generator = FakeReplyGenerator()
    with pytest.raises(ValidationError) as exc_info:
        await diary_service.create_entry(user.id, "hello", "  ", db, reply_generator=generator)
    assert "API key is required" in exc_info.value.message
    assert diary_service.list_entries(user.id, db) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("kind, expected", [
    (ReplyFailure.INVALID_KEY, AIKeyError),
    (ReplyFailure.QUOTA_EXCEEDED, AIKeyError),
    (ReplyFailure.UPSTREAM_UNAVAILABLE, UpstreamTransportError),
    (ReplyFailure.NETWORK_ERROR, UpstreamTransportError),
    (ReplyFailure.EMPTY_RESPONSE, UnknownError),
    (ReplyFailure.UNKNOWN, UnknownError),
])
async def test_ai_failure_writes_nothing(db, user, kind, expected):
    generator = FakeReplyGenerator(error=AIReplyError(kind))
    with pytest.raises(expected):
        await diary_service.create_entry(user.id, "hello", "sk-test", db, reply_generator=generator)
    assert diary_service.list_entries(user.id, db) == []


@pytest.mark.asyncio
async def test_blank_reply_is_not_stored(db, user):
    generator = FakeReplyGenerator(reply="   ")
    with pytest.raises(UnknownError):
        await diary_service.create_entry(user.id, "hello", "sk-test", db, reply_generator=generator)
    assert diary_service.list_entries(user.id, db) == []


@pytest.mark.asyncio
async def test_entries_are_isolated_between_users(db, user, other_user):
    generator = FakeReplyGenerator()
    await diary_service.create_entry(user.id, "mine", "sk-test", db, reply_generator=generator)

    assert diary_service.list_entries(other_user.id, db) == []
    assert diary_service.list_entry_dates(other_user.id, db) == []
    assert len(diary_service.list_entry_dates(user.id, db)) == 1


def test_entry_dates_are_distinct_and_sorted(db, user):
    from deardiary.models.diary import DiaryEntry
    for created_at in (
        datetime(2026, 1, 10, 22, 0),
        datetime(2026, 1, 9, 7, 30),
        datetime(2026, 1, 10, 6, 15),
    ):
        db.add(DiaryEntry(user_id=user.id, content="x", ai_reply=FAKE_REPLY, created_at=created_at))
    db.commit()

    assert diary_service.list_entry_dates(user.id, db, tz=timezone.utc) == ["2026-01-09", "2026-01-10"]


def test_content_limit_counts_utf16_units():
    # Each emoji is two UTF-16 code units
    assert diary_service.utf16_length("😀" * 3) == 6
    assert diary_service.validate_entry("😀" * 2500, "sk-test") == "😀" * 2500
    with pytest.raises(ValidationError):
        diary_service.validate_entry("😀" * 2501, "sk-test")
    assert diary_service.validate_entry("x" * 5000, "sk-test") == "x" * 5000
