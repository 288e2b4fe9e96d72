"""Relation model - a user's like, dislike or bookmark on a tuit."""
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, UUIDv7Mixin

if TYPE_CHECKING:
    from models.tuit import Tuit
    from models.user import User


class RelationKind(StrEnum):
    """Kind of user-to-tuit relation. Each kind has its own counter column on Tuit."""

    BOOKMARK = "bookmark"
    LIKE = "like"
    DISLIKE = "dislike"

    @property
    def counter_attr(self) -> str:
        """Name of the Tuit attribute caching the number of relations of this kind."""
        return f"{self.value}_count"

    @property
    def plural(self) -> str:
        """URL segment for this kind, e.g. 'likes'."""
        return f"{self.value}s"


class Relation(Base, UUIDv7Mixin):
    """
    Set-membership fact: `actor` has a relation of `kind` with `subject`.

    At most one row exists per (actor, subject, kind); the unique constraint is
    what turns a lost toggle race into DuplicateRelationError.
    """

    __tablename__ = "relations"

    actor_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    subject_id: Mapped[UUID] = mapped_column(
        ForeignKey("tuits.id", ondelete="CASCADE"),
        nullable=False,
    )
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.clock_timestamp(),
        nullable=False,
    )

    actor: Mapped["User"] = relationship()
    subject: Mapped["Tuit"] = relationship()

    __table_args__ = (
        UniqueConstraint("actor_id", "subject_id", "kind", name="uq_relation_actor_subject_kind"),
        CheckConstraint(
            "kind IN ('bookmark', 'like', 'dislike')",
            name="ck_relation_kind",
        ),
        # count_by_subject / list_by_subject
        Index("ix_relations_subject_kind", "subject_id", "kind"),
        # list_by_actor / remove_all_by_actor
        Index("ix_relations_actor_kind", "actor_id", "kind"),
    )
