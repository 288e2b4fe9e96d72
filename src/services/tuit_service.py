"""Service layer for tuit CRUD operations."""
import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.relation import Relation, RelationKind
from models.tuit import Tuit
from models.user import User
from schemas.tuit import TuitCreate, TuitUpdate
from services.exceptions import UserNotFoundError
from services.toggle_service import ToggleService

logger = logging.getLogger(__name__)


async def create_tuit(db: AsyncSession, user_id: UUID, data: TuitCreate) -> Tuit:
    """
    Post a tuit on behalf of a user. Counters start at zero.

    Raises:
        UserNotFoundError: If the author does not exist.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    author = await db.get(User, user_id)
    if author is None:
        raise UserNotFoundError(user_id)

    tuit = Tuit(author=author, **data.model_dump())
    db.add(tuit)
    await db.flush()
    await db.refresh(tuit)
    return tuit


async def get_tuit(db: AsyncSession, tuit_id: UUID) -> Tuit | None:
    """
    Get a tuit by ID with its author.

    Uses populate_existing so counters moved by UPDATE statements earlier in the
    same session are re-read rather than served from the identity map.
    """
    result = await db.execute(
        select(Tuit)
        .where(Tuit.id == tuit_id)
        .execution_options(populate_existing=True),
    )
    return result.unique().scalar_one_or_none()


async def list_tuits(db: AsyncSession) -> Sequence[Tuit]:
    """All tuits, newest first."""
    result = await db.execute(
        select(Tuit)
        .order_by(Tuit.posted_on.desc(), Tuit.id.desc())
        .execution_options(populate_existing=True),
    )
    return result.unique().scalars().all()


async def list_tuits_by_user(db: AsyncSession, user_id: UUID) -> Sequence[Tuit]:
    """Tuits posted by a user, newest first."""
    result = await db.execute(
        select(Tuit)
        .where(Tuit.posted_by == user_id)
        .order_by(Tuit.posted_on.desc(), Tuit.id.desc())
        .execution_options(populate_existing=True),
    )
    return result.unique().scalars().all()


async def update_tuit(db: AsyncSession, tuit_id: UUID, data: TuitUpdate) -> Tuit | None:
    """
    Edit a tuit's content fields. Returns None if not found.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    tuit = await get_tuit(db, tuit_id)
    if tuit is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(tuit, field, value)

    await db.flush()
    await db.refresh(tuit)
    return tuit


async def delete_tuit(db: AsyncSession, tuit_id: UUID) -> bool:
    """
    Delete a tuit and every like, dislike and bookmark on it.

    Returns True if deleted, False if not found.
    """
    tuit = await get_tuit(db, tuit_id)
    if tuit is None:
        return False

    for kind in RelationKind:
        await ToggleService(db, kind).clear_subject(tuit_id)
    await db.delete(tuit)
    await db.flush()
    return True


async def delete_tuits_by_user(db: AsyncSession, user_id: UUID) -> int:
    """
    Delete all tuits posted by a user, including the relations on them.

    Returns the number of tuits deleted.
    """
    tuit_ids = select(Tuit.id).where(Tuit.posted_by == user_id)
    await db.execute(
        delete(Relation)
        .where(Relation.subject_id.in_(tuit_ids))
        .execution_options(synchronize_session=False),
    )
    result = await db.execute(
        delete(Tuit)
        .where(Tuit.posted_by == user_id)
        .execution_options(synchronize_session="fetch"),
    )
    if result.rowcount:
        logger.info("Deleted %d tuits of user %s", result.rowcount, user_id)
    return result.rowcount
