"""Tests for user endpoints."""
from httpx import AsyncClient

from tests.api.conftest import FAKE_UUID, login, post_tuit, register


async def test__list_users(client: AsyncClient) -> None:
    a = await register(client)
    b = await register(client)
    response = await client.get('/api/users')
    assert response.status_code == 200
    ids = [u['id'] for u in response.json()]
    assert a['id'] in ids
    assert b['id'] in ids


async def test__get_user_by_id_and_me(client: AsyncClient) -> None:
    user = await register(client)
    assert (await client.get(f'/api/users/{user["id"]}')).json()['username'] == user['username']
    assert (await client.get('/api/users/me')).json()['id'] == user['id']


async def test__get_me_anonymous_is_401(client: AsyncClient) -> None:
    response = await client.get('/api/users/me')
    assert response.status_code == 401


async def test__get_unknown_user_is_404(client: AsyncClient) -> None:
    assert (await client.get(f'/api/users/{FAKE_UUID}')).status_code == 404


async def test__update_user(client: AsyncClient) -> None:
    await register(client)
    response = await client.put('/api/users/me', json={
        'biography': 'I tuit',
        'account_type': 'ACADEMIC',
    })
    assert response.status_code == 200
    assert response.json()['biography'] == 'I tuit'
    assert response.json()['account_type'] == 'ACADEMIC'


async def test__update_user__invalid_enum_is_422(client: AsyncClient) -> None:
    await register(client)
    response = await client.put('/api/users/me', json={'marital_status': 'COMPLICATED'})
    assert response.status_code == 422


async def test__delete_user__cascades_and_recounts(client: AsyncClient) -> None:
    doomed = await register(client)
    survivor = await register(client)
    tuit = await post_tuit(client, survivor['id'])
    await client.put(f'/api/users/{doomed["id"]}/likes/{tuit["id"]}')
    await client.put(f'/api/users/{survivor["id"]}/likes/{tuit["id"]}')
    doomed_tuit = await post_tuit(client, doomed['id'])

    response = await client.delete(f'/api/users/{doomed["id"]}')

    assert response.status_code == 204
    assert (await client.get(f'/api/users/{doomed["id"]}')).status_code == 404
    assert (await client.get(f'/api/tuits/{doomed_tuit["id"]}')).status_code == 404
    stats = (await client.get(f'/api/tuits/{tuit["id"]}')).json()['stats']
    assert stats['likes'] == 1
    await login(client, survivor['username'])
    assert (await client.get('/api/users/me')).json()['id'] == survivor['id']


async def test__delete_unknown_user_is_404(client: AsyncClient) -> None:
    assert (await client.delete(f'/api/users/{FAKE_UUID}')).status_code == 404
