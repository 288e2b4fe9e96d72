"""Service layer for follows between users."""
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.follow import Follow
from models.user import User
from services.exceptions import DuplicateFollowError, InvalidFollowError, UserNotFoundError
from services.utils import violates


async def follow(db: AsyncSession, follower_id: UUID, followee_id: UUID) -> Follow:
    """
    Record that `follower` follows `followee`.

    Raises:
        InvalidFollowError: If a user tries to follow themselves.
        UserNotFoundError: If either user does not exist.
        DuplicateFollowError: If the follow already exists.
    """
    if follower_id == followee_id:
        raise InvalidFollowError("Users cannot follow themselves")

    for user_id in (follower_id, followee_id):
        if await db.get(User, user_id) is None:
            raise UserNotFoundError(user_id)

    record = Follow(follower_id=follower_id, followee_id=followee_id)
    try:
        async with db.begin_nested():
            db.add(record)
    except IntegrityError as e:
        if violates(e, "uq_follow_pair"):
            raise DuplicateFollowError(follower_id, followee_id) from e
        raise
    await db.refresh(record)
    return record


async def unfollow(db: AsyncSession, follower_id: UUID, followee_id: UUID) -> bool:
    """Remove a follow. Returns False if it did not exist."""
    result = await db.execute(
        delete(Follow).where(
            Follow.follower_id == follower_id,
            Follow.followee_id == followee_id,
        ),
    )
    return result.rowcount > 0


async def list_following(db: AsyncSession, user_id: UUID) -> Sequence[User]:
    """Users that `user_id` follows, most recent first."""
    result = await db.execute(
        select(User)
        .join(Follow, Follow.followee_id == User.id)
        .where(Follow.follower_id == user_id)
        .order_by(Follow.followed_on.desc()),
    )
    return result.scalars().all()


async def list_followers(db: AsyncSession, user_id: UUID) -> Sequence[User]:
    """Users following `user_id`, most recent first."""
    result = await db.execute(
        select(User)
        .join(Follow, Follow.follower_id == User.id)
        .where(Follow.followee_id == user_id)
        .order_by(Follow.followed_on.desc()),
    )
    return result.scalars().all()


async def unfollow_all(db: AsyncSession, user_id: UUID) -> int:
    """Stop following everyone. Returns the number of follows removed."""
    result = await db.execute(delete(Follow).where(Follow.follower_id == user_id))
    return result.rowcount


async def remove_all_followers(db: AsyncSession, user_id: UUID) -> int:
    """Remove every follower of the user. Returns the number of follows removed."""
    result = await db.execute(delete(Follow).where(Follow.followee_id == user_id))
    return result.rowcount


async def delete_follows_for_user(db: AsyncSession, user_id: UUID) -> int:
    """Delete follows in both directions (account deletion cascade)."""
    result = await db.execute(
        delete(Follow).where(
            or_(Follow.follower_id == user_id, Follow.followee_id == user_id),
        ),
    )
    return result.rowcount
