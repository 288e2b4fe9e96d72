"""Follow endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, resolve_uid
from core.auth import resolve_user_id
from models.user import User
from schemas.follow import FollowResponse
from schemas.user import UserResponse
from services import follow_service
from services.exceptions import DuplicateFollowError, InvalidFollowError

router = APIRouter(prefix="/users/{uid}", tags=["follows"])


@router.post("/follows/{target}", response_model=FollowResponse, status_code=201)
async def follow_user(
    target: str,
    request: Request,
    user_id: UUID = Depends(resolve_uid),
    db: AsyncSession = Depends(get_async_session),
) -> FollowResponse:
    """Start following `target`."""
    target_id = resolve_user_id(target, request)
    try:
        record = await follow_service.follow(db, user_id, target_id)
    except InvalidFollowError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateFollowError as e:
        raise HTTPException(
            status_code=409,
            detail={"message": str(e), "error_code": "DUPLICATE_FOLLOW"},
        )
    return FollowResponse.model_validate(record)


@router.delete("/follows/{target}", status_code=204)
async def unfollow_user(
    target: str,
    request: Request,
    user_id: UUID = Depends(resolve_uid),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Stop following `target`."""
    target_id = resolve_user_id(target, request)
    if not await follow_service.unfollow(db, user_id, target_id):
        raise HTTPException(status_code=404, detail="Follow not found")


@router.get("/following", response_model=list[UserResponse])
async def list_following(
    user_id: UUID = Depends(resolve_uid),
    db: AsyncSession = Depends(get_async_session),
) -> list[User]:
    """Users this user follows."""
    return list(await follow_service.list_following(db, user_id))


@router.get("/followers", response_model=list[UserResponse])
async def list_followers(
    user_id: UUID = Depends(resolve_uid),
    db: AsyncSession = Depends(get_async_session),
) -> list[User]:
    """Users following this user."""
    return list(await follow_service.list_followers(db, user_id))


@router.delete("/following")
async def unfollow_all(
    user_id: UUID = Depends(resolve_uid),
    db: AsyncSession = Depends(get_async_session),
) -> dict[str, int]:
    """Stop following everyone."""
    return {"removed": await follow_service.unfollow_all(db, user_id)}


@router.delete("/followers")
async def remove_all_followers(
    user_id: UUID = Depends(resolve_uid),
    db: AsyncSession = Depends(get_async_session),
) -> dict[str, int]:
    """Remove all of this user's followers."""
    return {"removed": await follow_service.remove_all_followers(db, user_id)}
