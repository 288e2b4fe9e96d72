"""Pydantic schemas for message endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

MAX_MESSAGE_LENGTH = 5000


class MessageCreate(BaseModel):
    """Schema for sending a message."""

    message: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)


class MessageResponse(BaseModel):
    """Schema for message responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    sender_id: UUID
    recipient_id: UUID
    message: str
    sent_on: datetime
