"""Pydantic schemas for user and auth endpoints."""
import re
from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.user import AccountType, MaritalStatus

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def validate_username(value: str) -> str:
    """Usernames are letters, digits, '.', '_' and '-'. 'me' is reserved for the session user."""
    value = value.strip()
    if not USERNAME_PATTERN.match(value):
        raise ValueError(
            "Username may only contain letters, numbers, '.', '_' and '-'",
        )
    if value.lower() == "me":
        raise ValueError("Username 'me' is reserved")
    return value


class UserCreate(BaseModel):
    """Schema for registering a new user."""

    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=255)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    biography: str | None = None
    date_of_birth: date | None = None
    account_type: AccountType = AccountType.PERSONAL
    marital_status: MaritalStatus = MaritalStatus.SINGLE

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        """Validate username format."""
        return validate_username(v)


class UserUpdate(BaseModel):
    """Schema for updating a profile. Username and password are not editable here."""

    email: str | None = Field(default=None, min_length=3, max_length=255)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    profile_photo: str | None = None
    header_image: str | None = None
    biography: str | None = None
    date_of_birth: date | None = None
    account_type: AccountType | None = None
    marital_status: MaritalStatus | None = None


class LoginRequest(BaseModel):
    """Credentials for logging in."""

    username: str
    password: str


class UserResponse(BaseModel):
    """Public view of a user. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    first_name: str | None
    last_name: str | None
    profile_photo: str | None
    header_image: str | None
    biography: str | None
    date_of_birth: date | None
    account_type: str
    marital_status: str
    joined: datetime
