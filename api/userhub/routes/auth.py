from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
import logging

from ..database import get_session
from ..errors import ValidationFailed
from ..models import User
from ..schemas.auth import AuthData, LoginRequest, ProfileData, RegisterRequest, TokenData
from ..schemas.envelope import Envelope
from ..schemas.user import UserRead
from ..services import users as user_service
from ..services.auth import (
    TOKEN_TYPE,
    authenticate_user,
    get_current_user,
    issue_token,
    revoke_token,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=Envelope[AuthData], status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_session)):
    errors = {}
    if payload.password != payload.password_confirmation:
        errors["password"] = ["The password field confirmation does not match."]
    if user_service.find_by_email(db, payload.email):
        errors["email"] = [user_service.EMAIL_TAKEN]
    if errors:
        raise ValidationFailed(errors)

    user = user_service.create_user(db, payload)
    token = issue_token(db, user)
    logger.info(f"Registered user {user.id}")

    return Envelope(
        message="User registered successfully",
        data=AuthData(user=UserRead.model_validate(user), token=token, token_type=TOKEN_TYPE),
    )


@router.post("/login", response_model=Envelope[AuthData])
def login(payload: LoginRequest, db: Session = Depends(get_session)):
    user = authenticate_user(db, payload.email, payload.password)
    if not user:
        logger.info("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    token = issue_token(db, user)
    return Envelope(
        message="Login successful",
        data=AuthData(user=UserRead.model_validate(user), token=token, token_type=TOKEN_TYPE),
    )


@router.get("/me", response_model=Envelope[ProfileData])
def me(current_user: User = Depends(get_current_user)):
    return Envelope(
        message="User profile retrieved successfully",
        data=ProfileData(user=UserRead.model_validate(current_user)),
    )


@router.post("/logout", response_model=Envelope)
def logout(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session)
):
    revoke_token(db, current_user)
    return Envelope(message="Successfully logged out")


@router.post("/refresh", response_model=Envelope[TokenData])
def refresh(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session)
):
    token = issue_token(db, current_user)
    return Envelope(
        message="Token refreshed successfully",
        data=TokenData(token=token, token_type=TOKEN_TYPE),
    )
