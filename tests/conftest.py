"""
Test configuration and fixtures.

The environment is set before the app is imported; repositories are
replaced by in-memory fakes through FastAPI dependency overrides.
"""
import os
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("DB_HOST", "localhost")
os.environ.setdefault("DB_PORT", "5432")
os.environ.setdefault("DB_NAME", "contacts_test")
os.environ.setdefault("DB_USER", "postgres")
os.environ.setdefault("DB_PASS", "postgres")
os.environ["BCRYPT_ROUNDS"] = "4"

from app.main import app  # noqa: E402
from app.api.v1.deps import get_contact_repo, get_user_repo  # noqa: E402
from app.client.api import ContactsApiClient  # noqa: E402
from app.core.security import hash_password  # noqa: E402
from tests.fakes import FakeContactRepository, FakeUserRepository  # noqa: E402
from tests.helpers import TEST_PASSWORD, fake, headers_for  # noqa: E402


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def contact_repo() -> FakeContactRepository:
    return FakeContactRepository()


@pytest.fixture
def override_repos(user_repo, contact_repo):
    app.dependency_overrides[get_user_repo] = lambda: user_repo
    app.dependency_overrides[get_contact_repo] = lambda: contact_repo
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client(override_repos) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client wired to the app in-process"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def api_client(override_repos) -> AsyncGenerator[ContactsApiClient, None]:
    async with ContactsApiClient("http://test", transport=ASGITransport(app=app)) as api:
        yield api


async def _make_user(user_repo: FakeUserRepository) -> dict:
    return await user_repo.create({
        "email": fake.unique.email(),
        "hashed_password": hash_password(TEST_PASSWORD),
        "name": fake.name(),
    })


@pytest.fixture
async def test_user(user_repo) -> dict:
    return await _make_user(user_repo)


@pytest.fixture
async def other_user(user_repo) -> dict:
    return await _make_user(user_repo)


@pytest.fixture
def auth_headers(test_user) -> dict:
    return headers_for(test_user)


@pytest.fixture
def other_headers(other_user) -> dict:
    return headers_for(other_user)
