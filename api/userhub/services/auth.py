from fastapi import Depends, HTTPException, Request, status
from passlib.context import CryptContext
from sqlalchemy import func
from sqlmodel import Session, select
from typing import Optional
import logging
import secrets
import string

from .. import config
from ..database import get_session
from ..models import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=config.BCRYPT_ROUNDS)

TOKEN_LENGTH = 60
TOKEN_ALPHABET = string.ascii_letters + string.digits
TOKEN_TYPE = "Bearer"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def generate_token() -> str:
    """Random alphanumeric api token."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))


def issue_token(db: Session, user: User) -> str:
    """
    Give the user a fresh token, replacing whatever it had.
    """
    token = generate_token()
    user.api_token = token
    user.touch()
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.debug(f"Issued new token for user {user.id}")
    return token


def revoke_token(db: Session, user: User):
    user.api_token = None
    user.touch()
    db.add(user)
    db.commit()
    logger.debug(f"Revoked token for user {user.id}")


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    user = db.exec(select(User).where(func.lower(User.email) == email.lower())).first()
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def get_bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def unauthenticated(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"message": message, "code": "UNAUTHENTICATED"},
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(request: Request, db: Session = Depends(get_session)) -> User:
    """
    Resolve the bearer token of the request to its user or reject with 401.
    """
    token = get_bearer_token(request)
    if not token:
        raise unauthenticated("No token provided")

    user = db.exec(select(User).where(User.api_token == token)).first()
    if not user:
        logger.info("Rejected request with unknown token")
        raise unauthenticated("Invalid token")
    return user
