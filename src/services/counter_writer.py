"""Writes the denormalized relation counters stored on tuits."""
import logging
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import exists, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from models.relation import Relation, RelationKind
from models.tuit import Tuit
from services.exceptions import SubjectNotFoundError
from services.utils import violates

logger = logging.getLogger(__name__)


def _counter_column(kind: RelationKind | str) -> InstrumentedAttribute[int]:
    return getattr(Tuit, RelationKind(kind).counter_attr)


class CounterWriter:
    """Reads and writes Tuit.like_count / dislike_count / bookmark_count."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def subject_exists(self, subject_id: UUID) -> bool:
        """Check whether the tuit exists."""
        result = await self.db.scalar(select(exists().where(Tuit.id == subject_id)))
        return bool(result)

    async def get_counter(self, subject_id: UUID, kind: RelationKind | str) -> int:
        """
        Read the stored counter value.

        Raises:
            SubjectNotFoundError: If the tuit does not exist.
        """
        result = await self.db.execute(
            select(_counter_column(kind)).where(Tuit.id == subject_id),
        )
        value = result.scalar_one_or_none()
        if value is None:
            raise SubjectNotFoundError(subject_id)
        return value

    async def set_counter(self, subject_id: UUID, kind: RelationKind | str, value: int) -> None:
        """
        Overwrite the counter with an absolute value.

        Raises:
            ValueError: If value is negative.
            SubjectNotFoundError: If the tuit does not exist.
        """
        if value < 0:
            raise ValueError(f"Counter value must be non-negative, got {value}")
        result = await self.db.execute(
            update(Tuit)
            .where(Tuit.id == subject_id)
            .values({RelationKind(kind).counter_attr: value})
            .returning(Tuit.id),
        )
        if result.scalar_one_or_none() is None:
            raise SubjectNotFoundError(subject_id)

    async def increment_counter(
        self,
        subject_id: UUID,
        kind: RelationKind | str,
        delta: int,
    ) -> int:
        """
        Atomically add `delta` to the counter and return the new value.

        The addition happens inside the UPDATE statement, so concurrent
        increments on the same tuit serialize on the row lock instead of
        overwriting each other.

        A counter that has drifted below the real relation count (e.g., left
        behind by the legacy strategy) can be pushed under zero by a decrement.
        The CHECK constraint rejects that; the counter is then recomputed from
        the relation table and the recomputed value is returned.

        Raises:
            SubjectNotFoundError: If the tuit does not exist.
        """
        column = _counter_column(kind)
        try:
            async with self.db.begin_nested():
                result = await self.db.execute(
                    update(Tuit)
                    .where(Tuit.id == subject_id)
                    .values({RelationKind(kind).counter_attr: column + delta})
                    .returning(column),
                )
                value = result.scalar_one_or_none()
        except IntegrityError as e:
            if not violates(e, f"ck_tuit_{RelationKind(kind).counter_attr}"):
                raise
            logger.warning(
                "Tuit %s %s drifted below zero on delta %d; recounting",
                subject_id, RelationKind(kind).counter_attr, delta,
            )
            if not await self.recount([subject_id], kind):
                raise SubjectNotFoundError(subject_id) from e
            return await self.get_counter(subject_id, kind)
        if value is None:
            raise SubjectNotFoundError(subject_id)
        return value

    async def recount(self, subject_ids: Iterable[UUID], kind: RelationKind | str) -> int:
        """
        Set each tuit's counter to the exact number of relations of `kind`.

        The tuit rows are locked (in id order) before the UPDATE. Under READ
        COMMITTED a row-level wait inside the UPDATE itself would re-check the
        row but keep the statement's original snapshot for the count subquery,
        missing a toggle that committed during the wait. Taking the lock first
        means the UPDATE starts with a snapshot that includes it.

        Tuits that no longer exist are skipped. Returns the number of tuits updated.
        """
        ids = sorted(set(subject_ids))
        if not ids:
            return 0
        await self.db.execute(
            select(Tuit.id)
            .where(Tuit.id.in_(ids))
            .order_by(Tuit.id)
            .with_for_update(),
        )
        actual = (
            select(func.count(Relation.id))
            .where(Relation.subject_id == Tuit.id, Relation.kind == RelationKind(kind))
            .scalar_subquery()
        )
        result = await self.db.execute(
            update(Tuit)
            .where(Tuit.id.in_(ids))
            .values({RelationKind(kind).counter_attr: actual})
            .execution_options(synchronize_session="fetch"),
        )
        return result.rowcount
