from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime


def normalize_email(value):
    # Addresses are compared case-insensitively, so they are stored lowercased
    return value.lower() if isinstance(value, str) else value


class UserBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    # email-validator caps addresses at 254 characters
    email: EmailStr

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value):
        return normalize_email(value)


class UserCreate(UserBase):
    password: str = Field(min_length=8)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value):
        return normalize_email(value)


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserStats(BaseModel):
    total_users: int
    new_users_today: int
    active_users: int
