"""
Tests for registration and credential checks.
"""
import pytest
from deardiary.core.exceptions import (
    AuthenticationError, ConflictError, NotFoundError, ValidationError
)
from deardiary.services import user_service


def test_register_then_verify(db):
    user = user_service.register_user("Person@Example.com", " Person ", "secret123", db)
    assert user.email == "person@example.com"
    assert user.name == "Person"
    assert user.hashed_password != "secret123"
    assert user.created_at is not None

    verified = user_service.verify_credentials("person@example.com", "secret123", db)
    assert verified.id == user.id


def test_wrong_password_fails(db):
    user_service.register_user("p@example.com", "P", "secret123", db)
    with pytest.raises(AuthenticationError):
        user_service.verify_credentials("p@example.com", "secret124", db)


def test_unknown_user_fails_the_same_way(db):
    with pytest.raises(AuthenticationError) as exc_info:
        user_service.verify_credentials("nobody@example.com", "secret123", db)
    assert exc_info.value.message == "Invalid email or password"


def test_duplicate_email_any_case(db):
    user_service.register_user("A@B.com", "A", "secret123", db)
    with pytest.raises(ConflictError):
        user_service.register_user("a@b.com", "Other", "secret456", db)


@pytest.mark.parametrize("email, name, password", [
    ("missing-at.com", "A", "secret123"),
    ("a@b", "A", "secret123"),
    ("a b@c.com", "A", "secret123"),
    ("a@b.com", "A", "12345"),
    ("a@b.com", "  ", "secret123"),
    (None, "A", "secret123"),
    (" a@b.com", "A", "secret123"),
    ("a@b.com\n", "A", "secret123"),
])
def test_registration_validation(db, email, name, password):
    with pytest.raises(ValidationError):
        user_service.register_user(email, name, password, db)


def test_get_user_by_id(db):
    user = user_service.register_user("id@example.com", "Id", "secret123", db)
    assert user_service.get_user_by_id(user.id, db).email == "id@example.com"
    with pytest.raises(NotFoundError):
        user_service.get_user_by_id(user.id + 100, db)


def test_error_default_message():
    assert ValidationError().message == "Invalid request"
    assert NotFoundError("User not found").message == "User not found"
