"""Pydantic schemas for tuit endpoints."""
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from schemas.user import UserResponse

MAX_TUIT_LENGTH = 280


class TuitCreate(BaseModel):
    """Schema for posting a new tuit."""

    tuit: str = Field(min_length=1, max_length=MAX_TUIT_LENGTH)
    image: str | None = None
    youtube: str | None = None
    avatar_logo: str | None = None
    image_overlay: str | None = None


class TuitUpdate(BaseModel):
    """
    Schema for editing a tuit.

    Engagement counters are deliberately absent: they are maintained by the
    relation toggles and can't be set by clients.
    """

    model_config = ConfigDict(extra="forbid")

    tuit: str | None = Field(default=None, min_length=1, max_length=MAX_TUIT_LENGTH)
    image: str | None = None
    youtube: str | None = None
    avatar_logo: str | None = None
    image_overlay: str | None = None


class TuitStats(BaseModel):
    """Engagement counters of a tuit."""

    replies: int = 0
    retuits: int = 0
    likes: int = 0
    dislikes: int = 0
    bookmarks: int = 0


class TuitResponse(BaseModel):
    """Schema for tuit responses, with the author populated."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tuit: str
    posted_by: UserResponse
    posted_on: datetime
    image: str | None
    youtube: str | None
    avatar_logo: str | None
    image_overlay: str | None
    stats: TuitStats

    @model_validator(mode="before")
    @classmethod
    def from_orm_tuit(cls, data: Any) -> Any:
        """Map a Tuit model (flat *_count columns, `author` relationship) to the response shape."""
        if isinstance(data, dict) or not hasattr(data, "like_count"):
            return data
        return {
            "id": data.id,
            "tuit": data.tuit,
            "posted_by": UserResponse.model_validate(data.author),
            "posted_on": data.posted_on,
            "image": data.image,
            "youtube": data.youtube,
            "avatar_logo": data.avatar_logo,
            "image_overlay": data.image_overlay,
            "stats": TuitStats(
                replies=data.reply_count,
                retuits=data.retuit_count,
                likes=data.like_count,
                dislikes=data.dislike_count,
                bookmarks=data.bookmark_count,
            ),
        }
