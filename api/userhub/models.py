from sqlmodel import Field, SQLModel
from sqlalchemy import DateTime
from datetime import datetime, timezone
from typing import Optional


"""
This file contains the models for the database tables.

There is a single table:
    - users

Stats and search are read queries over it, nothing else is persisted.
"""


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    # Always stored lowercased, see schemas.user.normalize_email
    email: str = Field(max_length=255, unique=True, index=True)
    hashed_password: str
    # Not unique: tokens are random and never looked up for anything but auth
    api_token: Optional[str] = Field(default=None, max_length=80, index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    def touch(self):
        self.updated_at = utcnow()
