"""Direct message endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, resolve_uid
from core.auth import resolve_user_id
from models.message import Message
from schemas.message import MessageCreate, MessageResponse
from services import message_service
from services.exceptions import MessageNotFoundError

router = APIRouter(tags=["messages"])


@router.post(
    "/users/{uid}/messages/{target}",
    response_model=MessageResponse,
    status_code=201,
)
async def send_message(
    target: str,
    data: MessageCreate,
    request: Request,
    user_id: UUID = Depends(resolve_uid),
    db: AsyncSession = Depends(get_async_session),
) -> Message:
    """Send a message from `uid` to `target`."""
    target_id = resolve_user_id(target, request)
    return await message_service.send_message(db, user_id, target_id, data)


@router.get("/users/{uid}/messages/sent", response_model=list[MessageResponse])
async def list_sent(
    user_id: UUID = Depends(resolve_uid),
    db: AsyncSession = Depends(get_async_session),
) -> list[Message]:
    """Messages the user sent."""
    return list(await message_service.list_sent(db, user_id))


@router.get("/users/{uid}/messages/received", response_model=list[MessageResponse])
async def list_received(
    user_id: UUID = Depends(resolve_uid),
    db: AsyncSession = Depends(get_async_session),
) -> list[Message]:
    """Messages the user received."""
    return list(await message_service.list_received(db, user_id))


@router.delete("/messages/{mid}", status_code=204)
async def delete_message(
    mid: UUID,
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a message."""
    try:
        await message_service.delete_message(db, mid)
    except MessageNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
