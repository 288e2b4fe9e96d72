"""User account endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, resolve_uid
from models.user import User
from schemas.user import UserResponse, UserUpdate
from services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    db: AsyncSession = Depends(get_async_session),
) -> list[User]:
    """List all users."""
    return list(await user_service.list_users(db))


@router.get("/{uid}", response_model=UserResponse)
async def get_user(
    user_id: UUID = Depends(resolve_uid),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """Get a user by id, or the logged-in user via 'me'."""
    user = await user_service.get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{uid}", response_model=UserResponse)
async def update_user(
    data: UserUpdate,
    user_id: UUID = Depends(resolve_uid),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """Update profile fields."""
    user = await user_service.update_user(db, user_id, data)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.delete("/{uid}", status_code=204)
async def delete_user(
    user_id: UUID = Depends(resolve_uid),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Delete a user and everything they own.

    Their likes, dislikes and bookmarks are removed first and the counters on
    the affected tuits are recomputed.
    """
    deleted = await user_service.delete_user(db, user_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="User not found")
