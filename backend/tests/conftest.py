import asyncio

import pytest
from fastapi.testclient import TestClient

from kijani.core.config import Settings
from kijani.main import create_app
from scripts.create_admin import create_admin


class Api:
    """Thin wrapper over TestClient for the calls most tests repeat."""

    def __init__(self, client: TestClient) -> None:
        self.client = client

    def register(self, name: str, email: str, password: str):
        return self.client.post(
            '/api/auth/register',
            json={'name': name, 'email': email, 'password': password},
        )

    def login(self, email: str, password: str) -> str:
        response = self.client.post('/api/auth/login', json={'email': email, 'password': password})
        assert response.status_code == 200, response.text
        return response.json()['token']

    def signup(self, name: str, email: str, password: str = 'pw') -> tuple[dict, str]:
        response = self.register(name, email, password)
        assert response.status_code == 201, response.text
        return response.json(), self.login(email, password)

    def create_project(self, token: str, **body):
        return self.client.post('/api/projects', json=body, headers=bearer(token))


def bearer(token: str) -> dict[str, str]:
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'kijani.db'}",
        JWT_SECRET='test-secret',
        BCRYPT_SALT_ROUNDS=4,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def api(client) -> Api:
    return Api(client)


@pytest.fixture
def admin_token(api, settings) -> str:
    asyncio.run(create_admin(settings, name='Admin', email='admin@x.com', password='admin-pw'))
    return api.login('admin@x.com', 'admin-pw')
