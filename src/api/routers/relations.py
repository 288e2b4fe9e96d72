"""
Like, dislike and bookmark endpoints.

The three kinds share one set of routes, built per RelationKind by
build_router(). Bookmarks additionally get explicit set/unset and a
remove-all route.
"""
from collections.abc import Callable
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import resolve_uid, toggle_service_for
from models.relation import RelationKind
from schemas.relation import ClearResponse, RelationResponse, ToggleResponse
from schemas.tuit import TuitResponse
from schemas.user import UserResponse
from services.exceptions import SubjectNotFoundError, ToggleConflictError
from services.toggle_service import ToggleResult, ToggleService


def _subject_not_found(e: SubjectNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={"message": str(e), "error_code": "SUBJECT_NOT_FOUND"},
    )


def _toggle_conflict(e: ToggleConflictError) -> HTTPException:
    return HTTPException(
        status_code=409,
        detail={"message": str(e), "error_code": "TOGGLE_CONFLICT"},
    )


def _toggle_response(
    kind: RelationKind,
    user_id: UUID,
    tuit_id: UUID,
    result: ToggleResult,
) -> ToggleResponse:
    return ToggleResponse(
        kind=kind.value,
        user_id=user_id,
        tuit_id=tuit_id,
        is_now_active=result.is_now_active,
        new_count=result.new_count,
    )


def build_router(kind: RelationKind) -> APIRouter:
    """Create the router serving one relation kind, e.g. /users/{uid}/likes/{tid}."""
    router = APIRouter(tags=[kind.plural])
    plural = kind.plural
    get_service = toggle_service_for(kind)

    @router.put(f"/users/{{uid}}/{plural}/{{tid}}", response_model=ToggleResponse)
    async def toggle_relation(
        tid: UUID,
        user_id: UUID = Depends(resolve_uid),
        service: ToggleService = Depends(get_service),
    ) -> ToggleResponse:
        """Toggle the relation and return the new state and tuit counter."""
        try:
            result = await service.toggle(user_id, tid)
        except SubjectNotFoundError as e:
            raise _subject_not_found(e)
        except ToggleConflictError as e:
            raise _toggle_conflict(e)
        return _toggle_response(kind, user_id, tid, result)

    @router.get(f"/users/{{uid}}/{plural}", response_model=list[TuitResponse])
    async def list_tuits_for_user(
        user_id: UUID = Depends(resolve_uid),
        service: ToggleService = Depends(get_service),
    ) -> list[TuitResponse]:
        """Tuits the user has related to with this kind, most recent first."""
        relations = await service.list_for_actor(user_id)
        return [
            TuitResponse.model_validate(relation.subject)
            for relation in relations
            if relation.subject is not None
        ]

    @router.get(f"/tuits/{{tid}}/{plural}", response_model=list[UserResponse])
    async def list_users_for_tuit(
        tid: UUID,
        service: ToggleService = Depends(get_service),
    ) -> list[UserResponse]:
        """Users who have this relation with the tuit, most recent first."""
        try:
            relations = await service.list_for_subject(tid)
        except SubjectNotFoundError as e:
            raise _subject_not_found(e)
        return [UserResponse.model_validate(relation.actor) for relation in relations]

    @router.get(
        f"/users/{{uid}}/{plural}/{{tid}}",
        response_model=RelationResponse | None,
    )
    async def get_relation(
        tid: UUID,
        user_id: UUID = Depends(resolve_uid),
        service: ToggleService = Depends(get_service),
    ) -> RelationResponse | None:
        """The relation record if the user has it on the tuit, otherwise null."""
        relation = await service.get(user_id, tid)
        if relation is None:
            return None
        return RelationResponse.model_validate(relation)

    if kind is RelationKind.BOOKMARK:
        _add_bookmark_routes(router, get_service)

    return router


def _add_bookmark_routes(
    router: APIRouter,
    get_service: Callable[..., ToggleService],
) -> None:
    kind = RelationKind.BOOKMARK

    @router.post(
        "/users/{uid}/bookmarks/{tid}",
        response_model=ToggleResponse,
        status_code=201,
    )
    async def bookmark_tuit(
        tid: UUID,
        user_id: UUID = Depends(resolve_uid),
        service: ToggleService = Depends(get_service),
    ) -> ToggleResponse:
        """Bookmark a tuit. Bookmarking twice leaves the counter unchanged."""
        try:
            result = await service.activate(user_id, tid)
        except SubjectNotFoundError as e:
            raise _subject_not_found(e)
        except ToggleConflictError as e:
            raise _toggle_conflict(e)
        return _toggle_response(kind, user_id, tid, result)

    @router.delete("/users/{uid}/bookmarks/{tid}", response_model=ToggleResponse)
    async def unbookmark_tuit(
        tid: UUID,
        user_id: UUID = Depends(resolve_uid),
        service: ToggleService = Depends(get_service),
    ) -> ToggleResponse:
        """Remove a bookmark. Removing a missing bookmark is a no-op."""
        try:
            result = await service.deactivate(user_id, tid)
        except SubjectNotFoundError as e:
            raise _subject_not_found(e)
        except ToggleConflictError as e:
            raise _toggle_conflict(e)
        return _toggle_response(kind, user_id, tid, result)

    @router.delete("/users/{uid}/bookmarks", response_model=ClearResponse)
    async def unbookmark_all(
        user_id: UUID = Depends(resolve_uid),
        service: ToggleService = Depends(get_service),
    ) -> ClearResponse:
        """Remove all of the user's bookmarks; affected tuits are recounted."""
        removed = await service.clear_actor(user_id)
        return ClearResponse(kind=kind.value, user_id=user_id, removed=removed)


routers = [build_router(kind) for kind in RelationKind]
