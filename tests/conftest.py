"""Shared fixtures: an app built from test settings and an ASGI client.

The ASGI transport does not run the app lifespan, so no DB pool is opened.
Tests that touch persistence monkeypatch the repository functions; the
integration module brings its own pool.
"""

import logging

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from recordshare.auth.security import TokenService
from recordshare.core.config import Settings
from recordshare.main import create_app

TEST_SECRET = "test-signing-secret-0123456789abcdef"


@pytest.fixture()
def settings():
    return Settings(
        database_url="postgresql://unused/unused",
        jwt_secret=TEST_SECRET,
        access_token_expire_minutes=24 * 60,
        log_level="DEBUG",
        apply_schema=False,
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def tokens():
    return TokenService(TEST_SECRET, ttl_seconds=24 * 3600, logger=logging.getLogger("test.tokens"))


@pytest.fixture()
def token_for(tokens):
    """Mint a valid session token for a user id."""

    def _mint(user_id: int, login: str = "user") -> str:
        return tokens.issue(tokens.claims_for(login=login, user_id=user_id))

    return _mint


@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture()
async def authed_client(app, token_for):
    """Client carrying an access_token cookie for user 1."""
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        cookies={"access_token": token_for(1, "david")},
    ) as ac:
        yield ac
