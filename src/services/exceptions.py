"""Shared exceptions for service layer operations."""
from uuid import UUID


class SubjectNotFoundError(Exception):
    """Raised when the tuit a relation refers to does not exist."""

    def __init__(self, subject_id: UUID) -> None:
        self.subject_id = subject_id
        super().__init__(f"Tuit not found: {subject_id}")


class ActorUnresolvedError(Exception):
    """
    Raised when the acting user cannot be determined.

    Happens when a request uses the 'me' placeholder without a logged-in
    session. Raised before any store access, so nothing has been mutated.
    """

    def __init__(self, message: str = "No logged-in user to stand in for 'me'") -> None:
        super().__init__(message)


class DuplicateRelationError(Exception):
    """Raised when inserting a relation that already exists for (actor, subject, kind)."""

    def __init__(self, actor_id: UUID, subject_id: UUID, kind: str) -> None:
        self.actor_id = actor_id
        self.subject_id = subject_id
        self.kind = kind
        super().__init__(f"{kind} already exists for user {actor_id} on tuit {subject_id}")


class ToggleConflictError(Exception):
    """
    Raised when a toggle keeps losing races with concurrent toggles.

    The relation and counter are left as they were before the call; callers
    may retry.
    """

    def __init__(self, actor_id: UUID, subject_id: UUID, kind: str, attempts: int) -> None:
        self.actor_id = actor_id
        self.subject_id = subject_id
        self.kind = kind
        self.attempts = attempts
        super().__init__(
            f"Could not toggle {kind} for user {actor_id} on tuit {subject_id} "
            f"after {attempts} attempts",
        )


class StoreUnavailableError(Exception):
    """Raised when the database cannot be reached. Not retried by the service layer."""

    def __init__(self, message: str = "Database unavailable") -> None:
        super().__init__(message)


class UserNotFoundError(Exception):
    """Raised when a referenced user does not exist."""

    def __init__(self, user_id: UUID | str) -> None:
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")


class UsernameTakenError(Exception):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"Username already taken: {username}")


class InvalidCredentialsError(Exception):
    """Raised when a username/password pair does not match."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class DuplicateFollowError(Exception):
    """Raised when a user already follows the target user."""

    def __init__(self, follower_id: UUID, followee_id: UUID) -> None:
        self.follower_id = follower_id
        self.followee_id = followee_id
        super().__init__(f"User {follower_id} already follows {followee_id}")


class InvalidFollowError(Exception):
    """Raised when a follow is not allowed (e.g., following yourself)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class MessageNotFoundError(Exception):
    """Raised when a message does not exist."""

    def __init__(self, message_id: UUID) -> None:
        self.message_id = message_id
        super().__init__(f"Message not found: {message_id}")
