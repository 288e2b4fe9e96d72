"""Tuit CRUD endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, resolve_uid
from models.tuit import Tuit
from schemas.tuit import TuitCreate, TuitResponse, TuitUpdate
from services import tuit_service

router = APIRouter(tags=["tuits"])


@router.post("/users/{uid}/tuits", response_model=TuitResponse, status_code=201)
async def create_tuit(
    data: TuitCreate,
    user_id: UUID = Depends(resolve_uid),
    db: AsyncSession = Depends(get_async_session),
) -> TuitResponse:
    """Post a tuit as the given user."""
    tuit = await tuit_service.create_tuit(db, user_id, data)
    return TuitResponse.model_validate(tuit)


@router.get("/tuits", response_model=list[TuitResponse])
async def list_tuits(
    db: AsyncSession = Depends(get_async_session),
) -> list[TuitResponse]:
    """All tuits, newest first."""
    return [TuitResponse.model_validate(t) for t in await tuit_service.list_tuits(db)]


@router.get("/tuits/{tid}", response_model=TuitResponse)
async def get_tuit(
    tid: UUID,
    db: AsyncSession = Depends(get_async_session),
) -> TuitResponse:
    """Get a single tuit with its author and counters."""
    tuit = await tuit_service.get_tuit(db, tid)
    if tuit is None:
        raise HTTPException(status_code=404, detail="Tuit not found")
    return TuitResponse.model_validate(tuit)


@router.get("/users/{uid}/tuits", response_model=list[TuitResponse])
async def list_user_tuits(
    user_id: UUID = Depends(resolve_uid),
    db: AsyncSession = Depends(get_async_session),
) -> list[TuitResponse]:
    """Tuits posted by a user, newest first."""
    tuits = await tuit_service.list_tuits_by_user(db, user_id)
    return [TuitResponse.model_validate(t) for t in tuits]


@router.put("/tuits/{tid}", response_model=TuitResponse)
async def update_tuit(
    tid: UUID,
    data: TuitUpdate,
    db: AsyncSession = Depends(get_async_session),
) -> TuitResponse:
    """Edit a tuit's text or media. Counters cannot be set here."""
    tuit: Tuit | None = await tuit_service.update_tuit(db, tid, data)
    if tuit is None:
        raise HTTPException(status_code=404, detail="Tuit not found")
    return TuitResponse.model_validate(tuit)


@router.delete("/tuits/{tid}", status_code=204)
async def delete_tuit(
    tid: UUID,
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a tuit along with its likes, dislikes and bookmarks."""
    if not await tuit_service.delete_tuit(db, tid):
        raise HTTPException(status_code=404, detail="Tuit not found")
