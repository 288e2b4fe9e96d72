"""FastAPI dependencies for injection."""
from collections.abc import Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import get_current_user, resolve_uid
from core.config import Settings, get_settings
from db.session import get_async_session
from models.relation import RelationKind
from services.toggle_service import ToggleService


def toggle_service_for(kind: RelationKind) -> Callable[..., ToggleService]:
    """Build a dependency that yields a ToggleService for `kind` bound to the request session."""

    def _dependency(
        db: AsyncSession = Depends(get_async_session),
        settings: Settings = Depends(get_settings),
    ) -> ToggleService:
        return ToggleService.from_settings(db, kind, settings)

    return _dependency


__all__ = [
    "get_async_session",
    "get_current_user",
    "get_settings",
    "resolve_uid",
    "toggle_service_for",
]
