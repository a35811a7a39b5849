"""Endpoints for syncing and reading user records."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from user_sync.db import get_db
from user_sync.routers.errors import to_http_exception
from user_sync.schemas.user import UserRead
from user_sync.services import UserApiClient, get_user_client
from user_sync.services.errors import AuthApiError

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post("/fetch-and-save", response_model=list[UserRead])
async def fetch_and_save_users(
    user_client: UserApiClient = Depends(get_user_client),
    db: Session = Depends(get_db),
) -> list[UserRead]:
    """Pull every user from the remote API and upsert them locally."""

    try:
        users = await user_client.fetch_and_save_users(db)
    except AuthApiError as exc:
        raise to_http_exception(exc) from exc

    return [UserRead.model_validate(user) for user in users]


@router.get("", response_model=list[UserRead])
def list_users(
    user_client: UserApiClient = Depends(get_user_client),
    db: Session = Depends(get_db),
) -> list[UserRead]:
    users = user_client.get_all_users(db)
    return [UserRead.model_validate(user) for user in users]


@router.get("/{user_id}", response_model=UserRead)
def read_user(
    user_id: int,
    user_client: UserApiClient = Depends(get_user_client),
    db: Session = Depends(get_db),
) -> UserRead:
    user = user_client.get_user_by_id(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserRead.model_validate(user)
