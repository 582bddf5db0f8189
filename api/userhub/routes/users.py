from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import List

from ..database import get_session
from ..models import User
from ..schemas.envelope import Envelope
from ..schemas.user import UserCreate, UserRead, UserStats, UserUpdate
from ..services import users as user_service
from ..services.auth import get_current_user

# Every users endpoint requires a valid bearer token
router = APIRouter(dependencies=[Depends(get_current_user)])


def to_read(users: List[User]) -> List[UserRead]:
    return [UserRead.model_validate(user) for user in users]


@router.get("", response_model=Envelope[List[UserRead]])
def get_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_session)
):
    users = user_service.list_users(db, skip=skip, limit=limit)
    return Envelope(message="Users retrieved successfully", data=to_read(users))


@router.post("", response_model=Envelope[UserRead], status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, db: Session = Depends(get_session)):
    db_user = user_service.create_user(db, user)
    return Envelope(message="User created successfully", data=UserRead.model_validate(db_user))


# search and stats go before /{user_id} so the id route does not capture them
@router.get("/search/{query:path}", response_model=Envelope[List[UserRead]])
def search_users(query: str, db: Session = Depends(get_session)):
    users = user_service.search_users(db, query)
    return Envelope(message="Search completed successfully", data=to_read(users))


@router.get("/stats", response_model=Envelope[UserStats])
def get_stats(db: Session = Depends(get_session)):
    return Envelope(
        message="User statistics retrieved successfully",
        data=user_service.user_stats(db),
    )


@router.get("/{user_id}", response_model=Envelope[UserRead])
def get_user(user_id: int, db: Session = Depends(get_session)):
    user = user_service.get_user_or_404(db, user_id)
    return Envelope(message="User retrieved successfully", data=UserRead.model_validate(user))


@router.put("/{user_id}", response_model=Envelope[UserRead])
def update_user(
    user_id: int,
    user_update: UserUpdate,
    db: Session = Depends(get_session)
):
    user = user_service.update_user(db, user_id, user_update)
    return Envelope(message="User updated successfully", data=UserRead.model_validate(user))


@router.delete("/{user_id}", response_model=Envelope)
def delete_user(user_id: int, db: Session = Depends(get_session)):
    user_service.delete_user(db, user_id)
    return Envelope(message="User deleted successfully")
