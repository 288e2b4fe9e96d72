"""Storage of user-to-tuit relations (likes, dislikes, bookmarks)."""
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from models.relation import Relation, RelationKind
from services.exceptions import DuplicateRelationError, SubjectNotFoundError, UserNotFoundError
from services.utils import violates


class RelationStore:
    """
    Relation records of a single kind.

    Every query is scoped to `kind`, so three stores over the same table behave
    as three independent sets. The store never touches the counters on Tuit;
    that is ToggleService's job.
    """

    def __init__(self, db: AsyncSession, kind: RelationKind | str) -> None:
        self.db = db
        self.kind = RelationKind(kind)

    def _pair(self, actor_id: UUID, subject_id: UUID) -> tuple:
        return (
            Relation.actor_id == actor_id,
            Relation.subject_id == subject_id,
            Relation.kind == self.kind,
        )

    async def exists(self, actor_id: UUID, subject_id: UUID) -> bool:
        """True iff a relation of this kind exists for the pair."""
        result = await self.db.scalar(select(exists().where(*self._pair(actor_id, subject_id))))
        return bool(result)

    async def get(self, actor_id: UUID, subject_id: UUID) -> Relation | None:
        """Get the relation for the pair, or None."""
        result = await self.db.execute(
            select(Relation).where(*self._pair(actor_id, subject_id)),
        )
        return result.scalar_one_or_none()

    async def insert(self, actor_id: UUID, subject_id: UUID) -> Relation:
        """
        Create the relation for the pair.

        Runs in its own savepoint so a constraint violation leaves the
        surrounding transaction usable.

        Raises:
            DuplicateRelationError: If the pair already has a relation of this kind.
            SubjectNotFoundError: If the tuit does not exist.
            UserNotFoundError: If the actor does not exist.
        """
        relation = Relation(actor_id=actor_id, subject_id=subject_id, kind=self.kind)
        try:
            async with self.db.begin_nested():
                self.db.add(relation)
        except IntegrityError as e:
            if violates(e, "uq_relation_actor_subject_kind"):
                raise DuplicateRelationError(actor_id, subject_id, self.kind) from e
            if violates(e, "relations_subject_id_fkey"):
                raise SubjectNotFoundError(subject_id) from e
            if violates(e, "relations_actor_id_fkey"):
                raise UserNotFoundError(actor_id) from e
            raise
        return relation

    async def remove(self, actor_id: UUID, subject_id: UUID) -> bool:
        """Delete the relation for the pair. Returns False if there was none."""
        result = await self.db.execute(
            delete(Relation).where(*self._pair(actor_id, subject_id)),
        )
        return result.rowcount > 0

    async def remove_all_by_actor(self, actor_id: UUID) -> list[UUID]:
        """Delete every relation of this kind made by the actor. Returns the affected tuit ids."""
        result = await self.db.execute(
            delete(Relation)
            .where(Relation.actor_id == actor_id, Relation.kind == self.kind)
            .returning(Relation.subject_id),
        )
        return list(result.scalars().all())

    async def remove_all_by_subject(self, subject_id: UUID) -> int:
        """Delete every relation of this kind on the tuit. Returns the number removed."""
        result = await self.db.execute(
            delete(Relation).where(
                Relation.subject_id == subject_id,
                Relation.kind == self.kind,
            ),
        )
        return result.rowcount

    async def count_by_subject(self, subject_id: UUID) -> int:
        """Number of relations of this kind on the tuit."""
        result = await self.db.scalar(
            select(func.count(Relation.id)).where(
                Relation.subject_id == subject_id,
                Relation.kind == self.kind,
            ),
        )
        return result or 0

    async def list_by_subject(self, subject_id: UUID) -> Sequence[Relation]:
        """Relations on the tuit, newest first, with `actor` loaded."""
        result = await self.db.execute(
            select(Relation)
            .options(joinedload(Relation.actor))
            .where(Relation.subject_id == subject_id, Relation.kind == self.kind)
            .order_by(Relation.created_at.desc(), Relation.id.desc()),
        )
        return result.scalars().all()

    async def list_by_actor(self, actor_id: UUID) -> Sequence[Relation]:
        """Relations made by the actor, newest first, with `subject` (and its author) loaded."""
        result = await self.db.execute(
            select(Relation)
            .options(joinedload(Relation.subject))
            .where(Relation.actor_id == actor_id, Relation.kind == self.kind)
            .order_by(Relation.created_at.desc(), Relation.id.desc()),
        )
        return result.unique().scalars().all()
