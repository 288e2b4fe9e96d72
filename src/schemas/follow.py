"""Pydantic schemas for follow endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class FollowResponse(BaseModel):
    """A single follow record."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    follower_id: UUID
    followee_id: UUID
    followed_on: datetime
