"""Pydantic schemas for like / dislike / bookmark endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ToggleResponse(BaseModel):
    """Result of toggling (or setting) a relation."""

    kind: str
    user_id: UUID
    tuit_id: UUID
    is_now_active: bool
    new_count: int


class RelationResponse(BaseModel):
    """A single relation record."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    kind: str
    actor_id: UUID
    subject_id: UUID
    created_at: datetime


class ClearResponse(BaseModel):
    """Result of removing all of a user's relations of one kind."""

    kind: str
    user_id: UUID
    removed: int
