"""Service layer for direct messages."""
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.message import Message
from models.user import User
from schemas.message import MessageCreate
from services.exceptions import MessageNotFoundError, UserNotFoundError


async def send_message(
    db: AsyncSession,
    sender_id: UUID,
    recipient_id: UUID,
    data: MessageCreate,
) -> Message:
    """
    Send a message from one user to another.

    Raises:
        UserNotFoundError: If sender or recipient does not exist.
    """
    for user_id in (sender_id, recipient_id):
        if await db.get(User, user_id) is None:
            raise UserNotFoundError(user_id)

    message = Message(sender_id=sender_id, recipient_id=recipient_id, message=data.message)
    db.add(message)
    await db.flush()
    await db.refresh(message)
    return message


async def list_sent(db: AsyncSession, user_id: UUID) -> Sequence[Message]:
    """Messages sent by the user, newest first."""
    result = await db.execute(
        select(Message)
        .where(Message.sender_id == user_id)
        .order_by(Message.sent_on.desc(), Message.id.desc()),
    )
    return result.scalars().all()


async def list_received(db: AsyncSession, user_id: UUID) -> Sequence[Message]:
    """Messages sent to the user, newest first."""
    result = await db.execute(
        select(Message)
        .where(Message.recipient_id == user_id)
        .order_by(Message.sent_on.desc(), Message.id.desc()),
    )
    return result.scalars().all()


async def delete_message(db: AsyncSession, message_id: UUID) -> None:
    """
    Delete a single message.

    Raises:
        MessageNotFoundError: If the message does not exist.
    """
    message = await db.get(Message, message_id)
    if message is None:
        raise MessageNotFoundError(message_id)
    await db.delete(message)
    await db.flush()


async def delete_messages_for_user(db: AsyncSession, user_id: UUID) -> int:
    """Delete every message the user sent or received (account deletion cascade)."""
    result = await db.execute(
        delete(Message).where(
            or_(Message.sender_id == user_id, Message.recipient_id == user_id),
        ),
    )
    return result.rowcount
