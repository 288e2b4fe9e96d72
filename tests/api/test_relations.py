"""Tests for like / dislike / bookmark endpoints."""
import pytest
from httpx import AsyncClient

from tests.api.conftest import FAKE_UUID, login, post_tuit, register

KINDS = ['likes', 'dislikes', 'bookmarks']


async def _stats(client: AsyncClient, tid: str) -> dict:
    response = await client.get(f'/api/tuits/{tid}')
    assert response.status_code == 200
    return response.json()['stats']


# =============================================================================
# PUT /api/users/{uid}/{kind}/{tid} - Toggle
# =============================================================================


@pytest.mark.parametrize('kind', KINDS)
async def test__toggle__on_then_off(client: AsyncClient, kind: str) -> None:
    user = await register(client)
    tuit = await post_tuit(client, user['id'])

    on = await client.put(f'/api/users/me/{kind}/{tuit["id"]}')
    assert on.status_code == 200
    assert on.json()['is_now_active'] is True
    assert on.json()['new_count'] == 1
    assert on.json()['user_id'] == user['id']
    assert (await _stats(client, tuit['id']))[kind] == 1

    off = await client.put(f'/api/users/me/{kind}/{tuit["id"]}')
    assert off.json()['is_now_active'] is False
    assert off.json()['new_count'] == 0
    assert (await _stats(client, tuit['id']))[kind] == 0


async def test__toggle__two_users_scenario(client: AsyncClient) -> None:
    """u1 likes, u2 likes, u1 unlikes -> 1, 2, 1."""
    u1 = await register(client)
    u2 = await register(client)
    tuit = await post_tuit(client, u1['id'])
    url = '/api/users/{uid}/likes/' + tuit['id']

    counts = []
    for uid in (u1['id'], u2['id'], u1['id']):
        response = await client.put(url.format(uid=uid))
        assert response.status_code == 200
        counts.append(response.json()['new_count'])

    assert counts == [1, 2, 1]
    assert (await _stats(client, tuit['id']))['likes'] == 1


async def test__toggle__me_without_session_is_401_and_changes_nothing(
    client: AsyncClient,
) -> None:
    user = await register(client)
    tuit = await post_tuit(client, user['id'])
    await client.post('/api/auth/logout')

    response = await client.put(f'/api/users/me/likes/{tuit["id"]}')

    assert response.status_code == 401
    assert response.json()['detail']['error_code'] == 'ACTOR_UNRESOLVED'
    assert (await _stats(client, tuit['id']))['likes'] == 0
    users = await client.get(f'/api/tuits/{tuit["id"]}/likes')
    assert users.json() == []


async def test__toggle__unknown_tuit_is_404(client: AsyncClient) -> None:
    await register(client)
    response = await client.put(f'/api/users/me/bookmarks/{FAKE_UUID}')
    assert response.status_code == 404
    assert response.json()['detail']['error_code'] == 'SUBJECT_NOT_FOUND'


async def test__toggle__unknown_user_is_404(client: AsyncClient) -> None:
    user = await register(client)
    tuit = await post_tuit(client, user['id'])
    response = await client.put(f'/api/users/{FAKE_UUID}/likes/{tuit["id"]}')
    assert response.status_code == 404


async def test__toggle__malformed_uid_is_404(client: AsyncClient) -> None:
    user = await register(client)
    tuit = await post_tuit(client, user['id'])
    response = await client.put(f'/api/users/not-a-user/likes/{tuit["id"]}')
    assert response.status_code == 404


async def test__like_and_dislike_are_independent(client: AsyncClient) -> None:
    user = await register(client)
    tuit = await post_tuit(client, user['id'])

    await client.put(f'/api/users/me/likes/{tuit["id"]}')
    await client.put(f'/api/users/me/dislikes/{tuit["id"]}')

    stats = await _stats(client, tuit['id'])
    assert stats['likes'] == 1
    assert stats['dislikes'] == 1
    assert stats['bookmarks'] == 0


# =============================================================================
# GET endpoints
# =============================================================================


async def test__list_tuits_for_user(client: AsyncClient) -> None:
    user = await register(client)
    first = await post_tuit(client, user['id'], 'first')
    second = await post_tuit(client, user['id'], 'second')
    await client.put(f'/api/users/me/likes/{first["id"]}')
    await client.put(f'/api/users/me/likes/{second["id"]}')

    response = await client.get('/api/users/me/likes')

    assert response.status_code == 200
    assert [t['tuit'] for t in response.json()] == ['second', 'first']
    assert response.json()[0]['posted_by']['id'] == user['id']
    assert response.json()[0]['stats']['likes'] == 1


async def test__list_users_for_tuit(client: AsyncClient) -> None:
    u1 = await register(client)
    u2 = await register(client)
    tuit = await post_tuit(client, u1['id'])
    await client.put(f'/api/users/{u1["id"]}/dislikes/{tuit["id"]}')
    await client.put(f'/api/users/{u2["id"]}/dislikes/{tuit["id"]}')

    response = await client.get(f'/api/tuits/{tuit["id"]}/dislikes')

    assert response.status_code == 200
    assert {u['id'] for u in response.json()} == {u1['id'], u2['id']}


async def test__list_users_for_unknown_tuit_is_404(client: AsyncClient) -> None:
    response = await client.get(f'/api/tuits/{FAKE_UUID}/likes')
    assert response.status_code == 404


async def test__get_relation__record_or_null(client: AsyncClient) -> None:
    user = await register(client)
    tuit = await post_tuit(client, user['id'])
    url = f'/api/users/me/bookmarks/{tuit["id"]}'

    assert (await client.get(url)).json() is None

    await client.put(url)
    record = (await client.get(url)).json()
    assert record['kind'] == 'bookmark'
    assert record['actor_id'] == user['id']
    assert record['subject_id'] == tuit['id']


# =============================================================================
# Bookmark-only endpoints
# =============================================================================


async def test__bookmark_post_is_idempotent(client: AsyncClient) -> None:
    user = await register(client)
    tuit = await post_tuit(client, user['id'])
    url = f'/api/users/me/bookmarks/{tuit["id"]}'

    first = await client.post(url)
    second = await client.post(url)

    assert first.status_code == 201
    assert second.status_code == 201
    assert second.json()['new_count'] == 1
    assert (await _stats(client, tuit['id']))['bookmarks'] == 1


async def test__bookmark_delete(client: AsyncClient) -> None:
    user = await register(client)
    tuit = await post_tuit(client, user['id'])
    url = f'/api/users/me/bookmarks/{tuit["id"]}'
    await client.post(url)

    response = await client.delete(url)

    assert response.status_code == 200
    assert response.json()['is_now_active'] is False
    assert response.json()['new_count'] == 0
    assert (await client.delete(url)).json()['new_count'] == 0


async def test__likes_have_no_explicit_post(client: AsyncClient) -> None:
    user = await register(client)
    tuit = await post_tuit(client, user['id'])
    response = await client.post(f'/api/users/me/likes/{tuit["id"]}')
    assert response.status_code == 405


async def test__unbookmark_all_recounts(client: AsyncClient) -> None:
    u1 = await register(client)
    u2 = await register(client)
    tuit_a = await post_tuit(client, u2['id'])
    tuit_b = await post_tuit(client, u2['id'])
    await client.put(f'/api/users/{u1["id"]}/bookmarks/{tuit_a["id"]}')
    await client.put(f'/api/users/{u1["id"]}/bookmarks/{tuit_b["id"]}')
    await client.put(f'/api/users/{u2["id"]}/bookmarks/{tuit_a["id"]}')
    await login(client, u1['username'])

    response = await client.delete('/api/users/me/bookmarks')

    assert response.status_code == 200
    assert response.json()['removed'] == 2
    assert (await _stats(client, tuit_a['id']))['bookmarks'] == 1
    assert (await _stats(client, tuit_b['id']))['bookmarks'] == 0
    assert (await client.get('/api/users/me/bookmarks')).json() == []
