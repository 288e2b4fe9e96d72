"""
Toggle orchestration for likes, dislikes and bookmarks.

A toggle flips one (user, tuit) relation and moves the matching counter on the
tuit by one. Both writes happen inside a single SAVEPOINT, so a failure at any
step leaves the relation and the counter exactly as they were.

Two counter strategies are supported (Settings.counter_strategy):

- atomic: the counter moves with `UPDATE ... SET col = col + delta RETURNING col`.
  Concurrent toggles by different users on the same tuit all land.
- legacy: the relation count is read before the mutation and `count +/- 1` is
  written back. Two interleaved toggles on the same tuit can both read the same
  count, and one of the updates is lost. Kept for parity with older deployments;
  the counter_drift task repairs the damage.

After switching from legacy to atomic, a drifted counter can be lower than the
number of relations. A decrement that would take it below zero is caught by
CounterWriter.increment_counter, which recounts the tuit instead.

clear_actor and clear_subject recount from the relation table. The recount
locks the tuit rows first so the count includes toggles that committed while
it waited (see CounterWriter.recount).
"""
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from models.relation import Relation, RelationKind
from services.counter_writer import CounterWriter
from services.exceptions import DuplicateRelationError, SubjectNotFoundError, ToggleConflictError
from services.relation_store import RelationStore
from services.utils import translate_store_errors

logger = logging.getLogger(__name__)

CounterStrategy = Literal["atomic", "legacy"]


@dataclass(frozen=True)
class ToggleResult:
    """Outcome of a toggle: whether the relation now exists, and the tuit's new count."""

    is_now_active: bool
    new_count: int


class _StaleRead(Exception):
    """The relation disappeared between the existence check and the delete."""


class ToggleService:
    """
    The only writer of the relation counters on Tuit.

    One instance serves one relation kind over one session; build it per request
    (see api.dependencies.toggle_service_for) rather than sharing it.
    """

    def __init__(
        self,
        db: AsyncSession,
        kind: RelationKind | str,
        *,
        strategy: CounterStrategy = "atomic",
        max_attempts: int = 3,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.db = db
        self.kind = RelationKind(kind)
        self.strategy = strategy
        self.max_attempts = max_attempts
        self.store = RelationStore(db, self.kind)
        self.counters = CounterWriter(db)

    @classmethod
    def from_settings(
        cls,
        db: AsyncSession,
        kind: RelationKind | str,
        settings: Settings,
    ) -> "ToggleService":
        """Build a service using the configured counter strategy and retry budget."""
        return cls(
            db,
            kind,
            strategy=settings.counter_strategy,
            max_attempts=settings.toggle_max_attempts,
        )

    # --- Mutations ---

    async def toggle(self, actor_id: UUID, subject_id: UUID) -> ToggleResult:
        """
        Flip the relation between actor and subject and update the counter.

        Raises:
            SubjectNotFoundError: If the tuit does not exist (checked before any write),
                or was deleted while the toggle ran.
            UserNotFoundError: If the actor does not exist.
            ToggleConflictError: If concurrent toggles kept winning the race.
            StoreUnavailableError: If the database cannot be reached.
        """
        return await self._apply(actor_id, subject_id, desired=None)

    async def activate(self, actor_id: UUID, subject_id: UUID) -> ToggleResult:
        """Ensure the relation exists. A no-op (counter untouched) if it already does."""
        return await self._apply(actor_id, subject_id, desired=True)

    async def deactivate(self, actor_id: UUID, subject_id: UUID) -> ToggleResult:
        """Ensure the relation does not exist. A no-op if it already doesn't."""
        return await self._apply(actor_id, subject_id, desired=False)

    async def clear_actor(self, actor_id: UUID) -> int:
        """
        Remove every relation of this kind made by the actor.

        Counters of the affected tuits are recomputed from the relation table.
        Returns the number of relations removed.
        """
        with translate_store_errors():
            async with self.db.begin_nested():
                subject_ids = await self.store.remove_all_by_actor(actor_id)
                await self.counters.recount(subject_ids, self.kind)
        if subject_ids:
            logger.info(
                "Cleared %d %s relations for user %s",
                len(subject_ids), self.kind, actor_id,
            )
        return len(subject_ids)

    async def clear_subject(self, subject_id: UUID) -> int:
        """Remove every relation of this kind on the tuit and reset its counter."""
        with translate_store_errors():
            async with self.db.begin_nested():
                removed = await self.store.remove_all_by_subject(subject_id)
                await self.counters.recount([subject_id], self.kind)
        return removed

    # --- Reads ---

    async def is_active(self, actor_id: UUID, subject_id: UUID) -> bool:
        """Check whether the actor currently has this relation with the tuit."""
        with translate_store_errors():
            return await self.store.exists(actor_id, subject_id)

    async def get(self, actor_id: UUID, subject_id: UUID) -> Relation | None:
        """Get the relation record, or None."""
        with translate_store_errors():
            return await self.store.get(actor_id, subject_id)

    async def list_for_subject(self, subject_id: UUID) -> Sequence[Relation]:
        """
        Relations on a tuit, with the acting users loaded.

        Raises:
            SubjectNotFoundError: If the tuit does not exist.
        """
        with translate_store_errors():
            if not await self.counters.subject_exists(subject_id):
                raise SubjectNotFoundError(subject_id)
            return await self.store.list_by_subject(subject_id)

    async def list_for_actor(self, actor_id: UUID) -> Sequence[Relation]:
        """Relations made by a user, with the tuits loaded."""
        with translate_store_errors():
            return await self.store.list_by_actor(actor_id)

    # --- Internals ---

    async def _apply(
        self,
        actor_id: UUID,
        subject_id: UUID,
        desired: bool | None,
    ) -> ToggleResult:
        with translate_store_errors():
            if not await self.counters.subject_exists(subject_id):
                raise SubjectNotFoundError(subject_id)

            for attempt in range(1, self.max_attempts + 1):
                try:
                    return await self._attempt(actor_id, subject_id, desired)
                except (DuplicateRelationError, _StaleRead):
                    logger.info(
                        "Lost %s race for user %s on tuit %s (attempt %d/%d)",
                        self.kind, actor_id, subject_id, attempt, self.max_attempts,
                    )

        logger.warning(
            "Giving up %s toggle for user %s on tuit %s after %d attempts",
            self.kind, actor_id, subject_id, self.max_attempts,
        )
        raise ToggleConflictError(actor_id, subject_id, self.kind, self.max_attempts)

    async def _attempt(
        self,
        actor_id: UUID,
        subject_id: UUID,
        desired: bool | None,
    ) -> ToggleResult:
        """One read-mutate-count pass. Raises on a lost race; the savepoint undoes everything."""
        async with self.db.begin_nested():
            was_active = await self.store.exists(actor_id, subject_id)
            prior_count = (
                await self.store.count_by_subject(subject_id)
                if self.strategy == "legacy"
                else None
            )

            target = (not was_active) if desired is None else desired
            if target == was_active:
                count = await self.counters.get_counter(subject_id, self.kind)
                return ToggleResult(is_now_active=was_active, new_count=count)

            if was_active:
                if not await self.store.remove(actor_id, subject_id):
                    raise _StaleRead
                delta = -1
            else:
                await self.store.insert(actor_id, subject_id)
                delta = 1

            try:
                if prior_count is not None:
                    new_count = max(prior_count + delta, 0)
                    await self.counters.set_counter(subject_id, self.kind, new_count)
                else:
                    new_count = await self.counters.increment_counter(
                        subject_id, self.kind, delta,
                    )
            except SubjectNotFoundError:
                logger.warning(
                    "Tuit %s vanished during %s toggle by user %s; rolling back relation change",
                    subject_id, self.kind, actor_id,
                )
                raise

        return ToggleResult(is_now_active=target, new_count=new_count)
