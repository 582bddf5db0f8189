import pytest
from fastapi import HTTPException
from sqlmodel import Session
from starlette.requests import Request
from userhub.database import engine
from userhub.models import User
from userhub.services import auth
from userhub.services import users as user_service
from userhub.errors import ValidationFailed, field_errors
from userhub.schemas.user import UserCreate, UserUpdate


@pytest.fixture(name="session")
def session_fixture():
    with Session(engine) as session:
        yield session


@pytest.fixture
def user(session):
    return user_service.create_user(
        session,
        UserCreate(name="Test User", email="test@example.com", password="password123"),
    )


def make_request(authorization=None):
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


# Password hashing
def test_password_hash_roundtrip():
    hashed = auth.get_password_hash("password123")
    assert hashed != "password123"
    assert auth.verify_password("password123", hashed)
    assert not auth.verify_password("wrongpassword", hashed)


# Tokens
def test_generate_token_shape():
    token = auth.generate_token()
    assert len(token) == auth.TOKEN_LENGTH
    assert token.isalnum()


def test_generate_token_unique():
    tokens = {auth.generate_token() for _ in range(100)}
    assert len(tokens) == 100


def test_issue_and_revoke_token(session, user):
    token = auth.issue_token(session, user)
    assert user.api_token == token

    auth.revoke_token(session, user)
    session.refresh(user)
    assert user.api_token is None


def test_authenticate_user(session, user):
    assert auth.authenticate_user(session, "test@example.com", "password123").id == user.id
    assert auth.authenticate_user(session, "test@example.com", "nope") is None
    assert auth.authenticate_user(session, "missing@example.com", "password123") is None


@pytest.mark.parametrize("header,expected", [
    (None, None),
    ("", None),
    ("Bearer", None),
    ("Bearer   ", None),
    ("Basic abc", None),
    ("Bearer abc123", "abc123"),
    ("bearer abc123", "abc123"),
])
def test_get_bearer_token(header, expected):
    assert auth.get_bearer_token(make_request(header)) == expected


def test_get_current_user(session, user):
    token = auth.issue_token(session, user)
    current = auth.get_current_user(make_request(f"Bearer {token}"), db=session)
    assert current.id == user.id


def test_get_current_user_rejects_unknown_token(session, user):
    with pytest.raises(HTTPException) as exc_info:
        auth.get_current_user(make_request("Bearer unknown"), db=session)

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == {"message": "Invalid token", "code": "UNAUTHENTICATED"}


# User service
def test_create_user_duplicate_email(session, user):
    with pytest.raises(ValidationFailed) as exc_info:
        user_service.create_user(
            session,
            UserCreate(name="Other", email="test@example.com", password="password123"),
        )
    assert list(exc_info.value.errors) == ["email"]


def test_update_user_ignores_unset_fields(session, user):
    updated = user_service.update_user(session, user.id, UserUpdate(name="Renamed"))
    assert updated.name == "Renamed"
    assert updated.email == "test@example.com"


def test_get_user_or_404(session):
    with pytest.raises(HTTPException) as exc_info:
        user_service.get_user_or_404(session, 12345)
    assert exc_info.value.status_code == 404


def test_user_stats_counts(session, user):
    user_service.create_user(
        session,
        UserCreate(name="Second", email="second@example.com", password="password123"),
    )
    auth.issue_token(session, user)

    stats = user_service.user_stats(session)
    assert stats.total_users == 2
    assert stats.new_users_today == 2
    assert stats.active_users == 1


# Error formatting
def test_field_errors_groups_by_field():
    errors = [
        {"loc": ("body", "email"), "msg": "value is not a valid email address"},
        {"loc": ("body", "email"), "msg": "too long"},
        {"loc": ("body",), "msg": "Field required"},
        {"loc": ("query", "limit"), "msg": "too big"},
    ]
    assert field_errors(errors) == {
        "email": ["value is not a valid email address", "too long"],
        "body": ["Field required"],
        "limit": ["too big"],
    }
