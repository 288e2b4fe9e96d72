"""Shared helpers for API tests."""
from uuid import uuid4

from httpx import AsyncClient

FAKE_UUID = '00000000-0000-7000-8000-000000000000'
PASSWORD = 'api-test-password'


async def register(client: AsyncClient, username: str | None = None) -> dict:
    """Register a user via API (which also logs the client in as them)."""
    username = username or f'user-{uuid4().hex[:10]}'
    response = await client.post('/api/auth/register', json={
        'username': username,
        'password': PASSWORD,
        'email': f'{username}@example.com',
    })
    assert response.status_code == 200, response.text
    return response.json()


async def login(client: AsyncClient, username: str) -> None:
    """Switch the client's session to `username`."""
    response = await client.post('/api/auth/login', json={
        'username': username,
        'password': PASSWORD,
    })
    assert response.status_code == 200, response.text


async def post_tuit(client: AsyncClient, uid: str, text: str = 'hello') -> dict:
    """Post a tuit via API and return response data."""
    response = await client.post(f'/api/users/{uid}/tuits', json={'tuit': text})
    assert response.status_code == 201, response.text
    return response.json()
