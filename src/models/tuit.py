"""Tuit model - a short post with denormalized engagement counters."""
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin

if TYPE_CHECKING:
    from models.user import User


class Tuit(Base, UUIDv7Mixin, TimestampMixin):
    """
    Tuit model.

    like_count, dislike_count and bookmark_count are caches of the number of
    rows in `relations` for this tuit and kind. Only ToggleService writes them
    (plus the counter_drift repair task); the update schema does not expose them.
    """

    __tablename__ = "tuits"

    tuit: Mapped[str] = mapped_column(Text, nullable=False)
    posted_by: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    posted_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.clock_timestamp(),
        nullable=False,
    )
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    youtube: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_logo: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_overlay: Mapped[str | None] = mapped_column(Text, nullable=True)

    reply_count: Mapped[int] = mapped_column(default=0, server_default="0", nullable=False)
    retuit_count: Mapped[int] = mapped_column(default=0, server_default="0", nullable=False)
    like_count: Mapped[int] = mapped_column(default=0, server_default="0", nullable=False)
    dislike_count: Mapped[int] = mapped_column(default=0, server_default="0", nullable=False)
    bookmark_count: Mapped[int] = mapped_column(default=0, server_default="0", nullable=False)

    author: Mapped["User"] = relationship(lazy="joined")

    __table_args__ = (
        CheckConstraint("like_count >= 0", name="ck_tuit_like_count"),
        CheckConstraint("dislike_count >= 0", name="ck_tuit_dislike_count"),
        CheckConstraint("bookmark_count >= 0", name="ck_tuit_bookmark_count"),
        Index("ix_tuits_posted_by_posted_on", "posted_by", "posted_on"),
    )
