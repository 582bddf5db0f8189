import pytest
from datetime import datetime
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
from userhub.models import User
from userhub.database import engine


@pytest.fixture(name="session")
def session_fixture():
    with Session(engine) as session:
        yield session


# User Model Tests
def test_user_creation():
    user = User(
        name="Test User",
        email="test@example.com",
        hashed_password="hashedpass123",
    )
    assert user.name == "Test User"
    assert user.email == "test@example.com"
    assert user.api_token is None
    assert isinstance(user.created_at, datetime)
    assert isinstance(user.updated_at, datetime)


def test_user_touch_moves_updated_at():
    user = User(name="Test User", email="test@example.com", hashed_password="x")
    before = user.updated_at
    user.touch()
    assert user.updated_at >= before
    assert user.created_at <= user.updated_at


def test_user_persisted(session):
    user = User(name="Test User", email="test@example.com", hashed_password="x")
    session.add(user)
    session.commit()
    session.refresh(user)

    assert user.id is not None
    stored = session.exec(select(User).where(User.email == "test@example.com")).one()
    assert stored.name == "Test User"


def test_email_unique_at_database_level(session):
    session.add(User(name="First", email="same@example.com", hashed_password="x"))
    session.commit()

    session.add(User(name="Second", email="same@example.com", hashed_password="x"))
    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()


def test_token_not_unique_at_database_level(session):
    session.add(User(name="First", email="one@example.com", hashed_password="x", api_token="same"))
    session.add(User(name="Second", email="two@example.com", hashed_password="x", api_token="same"))
    session.commit()

    assert len(session.exec(select(User).where(User.api_token == "same")).all()) == 2


def test_timestamps_are_timezone_aware():
    user = User(name="Test User", email="test@example.com", hashed_password="x")
    assert user.created_at.tzinfo is not None
    assert user.updated_at.tzinfo is not None

    columns = User.__table__.c
    assert columns.created_at.type.timezone is True
    assert columns.updated_at.type.timezone is True


def test_touched_user_persisted(session):
    user = User(name="Test User", email="test@example.com", hashed_password="x")
    session.add(user)
    session.commit()

    user.touch()
    session.add(user)
    session.commit()
    session.refresh(user)

    assert user.updated_at >= user.created_at
