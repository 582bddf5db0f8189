from datetime import datetime, time, timezone
from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, or_, select
from typing import List, Optional
import logging

from ..errors import ValidationFailed
from ..models import User, utcnow
from ..schemas.user import UserCreate, UserStats, UserUpdate
from .auth import get_password_hash

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "The email has already been taken."


def find_by_email(db: Session, email: str) -> Optional[User]:
    return db.exec(select(User).where(func.lower(User.email) == email.lower())).first()


def ensure_email_available(db: Session, email: str, exclude_id: Optional[int] = None):
    existing = find_by_email(db, email)
    if existing and existing.id != exclude_id:
        raise ValidationFailed({"email": [EMAIL_TAKEN]})


def commit_user(db: Session, db_user: User):
    """
    Commit pending changes to a user. Email is the only unique column, so a
    violation here means another request took the address after
    ensure_email_available ran.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info(f"Email uniqueness violated on commit: {str(e.orig)}")
        raise ValidationFailed({"email": [EMAIL_TAKEN]})
    db.refresh(db_user)


def list_users(db: Session, skip: int = 0, limit: int = 100) -> List[User]:
    return db.exec(select(User).order_by(User.id).offset(skip).limit(limit)).all()


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user


def create_user(db: Session, user: UserCreate) -> User:
    ensure_email_available(db, user.email)

    db_user = User(
        name=user.name,
        email=user.email,
        hashed_password=get_password_hash(user.password),
    )
    db.add(db_user)
    commit_user(db, db_user)
    logger.info(f"Created user {db_user.id}")
    return db_user


def update_user(db: Session, user_id: int, user_update: UserUpdate) -> User:
    db_user = get_user_or_404(db, user_id)

    changes = user_update.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in changes:
        ensure_email_available(db, changes["email"], exclude_id=db_user.id)

    for field, value in changes.items():
        if field == "password":
            value = get_password_hash(value)
            field = "hashed_password"
        setattr(db_user, field, value)

    db_user.touch()
    db.add(db_user)
    commit_user(db, db_user)
    return db_user


def delete_user(db: Session, user_id: int):
    db_user = get_user_or_404(db, user_id)
    db.delete(db_user)
    db.commit()
    logger.info(f"Deleted user {user_id}")


def search_users(db: Session, query: str) -> List[User]:
    """
    Case-insensitive substring match on name or email.
    """
    escaped = query.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    statement = (
        select(User)
        .where(or_(
            func.lower(User.name).like(pattern, escape="\\"),
            func.lower(User.email).like(pattern, escape="\\"),
        ))
        .order_by(User.id)
    )
    return db.exec(statement).all()


def user_stats(db: Session) -> UserStats:
    start_of_day = datetime.combine(utcnow().date(), time.min, tzinfo=timezone.utc)

    total_users = db.exec(select(func.count()).select_from(User)).one()
    new_users_today = db.exec(
        select(func.count()).select_from(User).where(User.created_at >= start_of_day)
    ).one()
    active_users = db.exec(
        select(func.count()).select_from(User).where(User.api_token.is_not(None))
    ).one()

    return UserStats(
        total_users=total_users,
        new_users_today=new_users_today,
        active_users=active_users,
    )
