"""SQLAlchemy models."""
from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.user import AccountType, MaritalStatus, User
from models.tuit import Tuit
from models.relation import Relation, RelationKind
from models.follow import Follow
from models.message import Message

__all__ = [
    "AccountType",
    "Base",
    "Follow",
    "MaritalStatus",
    "Message",
    "Relation",
    "RelationKind",
    "TimestampMixin",
    "Tuit",
    "UUIDv7Mixin",
    "User",
]
