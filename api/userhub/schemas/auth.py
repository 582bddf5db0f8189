from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from .user import UserCreate, UserRead, normalize_email


class RegisterRequest(UserCreate):
    # Checked against password by the auth service so the error lands on "password"
    password_confirmation: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value):
        return normalize_email(value)


class TokenData(BaseModel):
    token: str
    token_type: str = "Bearer"


class AuthData(TokenData):
    user: UserRead


class ProfileData(BaseModel):
    user: UserRead
