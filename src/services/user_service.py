"""Service layer for user accounts."""
import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import hash_password, verify_password
from models.relation import RelationKind
from models.user import User
from schemas.user import UserCreate, UserUpdate
from services import follow_service, message_service, tuit_service
from services.exceptions import InvalidCredentialsError, UsernameTakenError
from services.toggle_service import ToggleService

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: UUID) -> User | None:
    """Get a user by ID."""
    return await db.get(User, user_id)


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    """Get a user by username."""
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def list_users(db: AsyncSession) -> Sequence[User]:
    """All users, oldest account first."""
    result = await db.execute(select(User).order_by(User.joined, User.id))
    return result.scalars().all()


async def create_user(
    db: AsyncSession,
    data: UserCreate,
    bcrypt_rounds: int = 12,
) -> User:
    """
    Register a user with a hashed password.

    Raises:
        UsernameTakenError: If the username is already registered.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    if await get_user_by_username(db, data.username) is not None:
        raise UsernameTakenError(data.username)

    fields = data.model_dump(exclude={"password"})
    user = User(
        password_hash=hash_password(data.password, rounds=bcrypt_rounds),
        **fields,
    )
    try:
        async with db.begin_nested():
            db.add(user)
    except IntegrityError as e:
        # Another registration with the same username committed in between
        raise UsernameTakenError(data.username) from e
    await db.refresh(user)
    return user


async def authenticate(db: AsyncSession, username: str, password: str) -> User:
    """
    Check credentials and return the matching user.

    Raises:
        InvalidCredentialsError: If the user does not exist or the password is wrong.
    """
    user = await get_user_by_username(db, username)
    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()
    return user


async def update_user(db: AsyncSession, user_id: UUID, data: UserUpdate) -> User | None:
    """Update profile fields. Returns None if the user does not exist."""
    user = await get_user(db, user_id)
    if user is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(user, field, value)

    await db.flush()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user_id: UUID) -> bool:
    """
    Delete a user and everything they own.

    Order matters: the user's likes, dislikes and bookmarks are removed through
    ToggleService first so the counters on other users' tuits are recomputed.
    Only then are the user's own tuits, follows and messages removed.

    Returns True if deleted, False if not found.
    """
    user = await get_user(db, user_id)
    if user is None:
        return False

    async with db.begin_nested():
        removed_relations = 0
        for kind in RelationKind:
            removed_relations += await ToggleService(db, kind).clear_actor(user_id)
        removed_tuits = await tuit_service.delete_tuits_by_user(db, user_id)
        removed_follows = await follow_service.delete_follows_for_user(db, user_id)
        removed_messages = await message_service.delete_messages_for_user(db, user_id)
        await db.delete(user)

    logger.info(
        "Deleted user %s (relations=%d tuits=%d follows=%d messages=%d)",
        user_id, removed_relations, removed_tuits, removed_follows, removed_messages,
    )
    return True
