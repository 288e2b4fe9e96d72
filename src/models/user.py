"""User model for registered accounts."""
from datetime import date, datetime
from enum import StrEnum

from sqlalchemy import Date, DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin, UUIDv7Mixin


class AccountType(StrEnum):
    """Kind of account a user registered."""

    PERSONAL = "PERSONAL"
    ACADEMIC = "ACADEMIC"
    PROFESSIONAL = "PROFESSIONAL"


class MaritalStatus(StrEnum):
    """Marital status shown on the profile."""

    MARRIED = "MARRIED"
    SINGLE = "SINGLE"
    WIDOWED = "WIDOWED"


class User(Base, UUIDv7Mixin, TimestampMixin):
    """
    User model - credentials plus public profile.

    Owned rows (tuits, relations, follows, messages) are removed by
    user_service.delete_user before the user row itself, so that the
    denormalized counters on other users' tuits stay correct. The database
    level ON DELETE CASCADE on those foreign keys is only a backstop.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    profile_photo: Mapped[str | None] = mapped_column(Text, nullable=True)
    header_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    biography: Mapped[str | None] = mapped_column(Text, nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    account_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AccountType.PERSONAL,
    )
    marital_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MaritalStatus.SINGLE,
    )
    joined: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.clock_timestamp(),
        nullable=False,
    )
