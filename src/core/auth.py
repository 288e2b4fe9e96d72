"""
Cookie-session authentication and identity resolution.

The session cookie (Starlette SessionMiddleware) stores only the user id.
Path parameters naming a user accept the literal 'me', which is replaced here
by the logged-in user's id before any service is called; services never see it.
"""
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_async_session
from models.user import User
from services.exceptions import ActorUnresolvedError, UserNotFoundError

SELF_ALIAS = "me"
SESSION_USER_KEY = "user_id"


def get_session_user_id(request: Request) -> UUID | None:
    """Return the user id stored in the session, or None if not logged in."""
    raw = request.session.get(SESSION_USER_KEY)
    if raw is None:
        return None
    try:
        return UUID(raw)
    except (TypeError, ValueError):
        # Signed but unusable (e.g., written by an older release); treat as logged out.
        request.session.pop(SESSION_USER_KEY, None)
        return None


def login_session(request: Request, user: User) -> None:
    """Bind the session to a user."""
    request.session.clear()
    request.session[SESSION_USER_KEY] = str(user.id)


def logout_session(request: Request) -> None:
    """Drop everything stored in the session."""
    request.session.clear()


def resolve_user_id(uid: str, request: Request) -> UUID:
    """
    Turn a `{uid}` path parameter into a concrete user id.

    Raises:
        ActorUnresolvedError: If uid is 'me' and nobody is logged in.
        UserNotFoundError: If uid is not a valid user id.
    """
    if uid == SELF_ALIAS:
        user_id = get_session_user_id(request)
        if user_id is None:
            raise ActorUnresolvedError()
        return user_id
    try:
        return UUID(uid)
    except ValueError:
        raise UserNotFoundError(uid)


async def resolve_uid(uid: str, request: Request) -> UUID:
    """FastAPI dependency wrapping resolve_user_id for routes with a `{uid}` segment."""
    return resolve_user_id(uid, request)


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Dependency returning the logged-in user.

    Responds 403 when there is no session, matching what the profile endpoint
    has always returned for anonymous callers.
    """
    user_id = get_session_user_id(request)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not logged in",
        )
    user = await db.get(User, user_id)
    if user is None:
        logout_session(request)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not logged in",
        )
    return user
