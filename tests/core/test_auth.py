"""Tests for 'me' resolution and session helpers."""
from types import SimpleNamespace
from uuid import UUID, uuid4

import pytest

from core.auth import SESSION_USER_KEY, get_session_user_id, resolve_user_id
from services.exceptions import ActorUnresolvedError, UserNotFoundError


def fake_request(session: dict | None = None) -> SimpleNamespace:
    """Stand-in for a Starlette Request; only .session is used."""
    return SimpleNamespace(session={} if session is None else session)


def test__me_resolves_to_session_user() -> None:
    user_id = uuid4()
    request = fake_request({SESSION_USER_KEY: str(user_id)})
    assert resolve_user_id("me", request) == user_id


def test__me_without_session_raises() -> None:
    with pytest.raises(ActorUnresolvedError):
        resolve_user_id("me", fake_request())


def test__explicit_uid_passes_through_without_session() -> None:
    user_id = uuid4()
    assert resolve_user_id(str(user_id), fake_request()) == user_id


def test__malformed_uid_is_user_not_found() -> None:
    with pytest.raises(UserNotFoundError):
        resolve_user_id("not-a-uuid", fake_request())


def test__garbage_session_value_is_dropped() -> None:
    session = {SESSION_USER_KEY: "garbage"}
    assert get_session_user_id(fake_request(session)) is None
    assert SESSION_USER_KEY not in session


def test__session_value_is_parsed() -> None:
    user_id = uuid4()
    assert get_session_user_id(fake_request({SESSION_USER_KEY: str(user_id)})) == UUID(str(user_id))
