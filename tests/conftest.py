"""
MyGram Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Unit tests (no database):
    ├── mock_db_session:  AsyncMock standing in for AsyncSession
    ├── hasher:           PasswordHasher at bcrypt's minimum cost
    ├── token_service:    TokenService with a fixed test secret
    └── credential_store: In-memory CredentialStore

    API tests:
    ├── db_engine:        SQLite (aiosqlite) database file per test
    └── test_client:      HTTPX AsyncClient bound to the app, with
                          get_db_session overridden to use db_engine
"""

import os

# Settings are read at import time; set the test environment first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["JWT_SECRET"] = "test-signing-secret-with-at-least-32-bytes"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from mygram.database import Base
from mygram.models.base import utcnow
from mygram.models.user import User
from mygram.services.password_service import PasswordHasher
from mygram.services.token_service import AuthenticatedSession, TokenService

TEST_SECRET = os.environ["JWT_SECRET"]
NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


class InMemoryCredentialStore:
    """CredentialStore backed by a dict, for service tests without a database."""

    def __init__(self):
        self.rows: Dict[int, User] = {}
        self._next_id = 1

    async def find_by_email(self, email: str) -> Optional[User]:
        for user in self.rows.values():
            if user.email == email and user.deleted_at is None:
                return user
        return None

    async def find_by_id(self, user_id: int) -> Optional[User]:
        user = self.rows.get(user_id)
        if user is None or user.deleted_at is not None:
            return None
        return user

    async def insert(self, user: User) -> User:
        if user.id is None:
            user.id = self._next_id
            self._next_id += 1
        self.rows[user.id] = user
        return user

    async def update(self, user_id: int, fields: Mapping[str, Any]) -> Optional[User]:
        user = await self.find_by_id(user_id)
        if user is None:
            return None
        for name, value in fields.items():
            setattr(user, name, value)
        return user

    async def soft_delete(self, user_id: int) -> Optional[User]:
        user = await self.find_by_id(user_id)
        if user is None:
            return None
        user.deleted_at = utcnow()
        return user


def _session_for(user_id: int = 1, username: str = "alice") -> AuthenticatedSession:
    return AuthenticatedSession(
        user_id=user_id,
        username=username,
        dob=date(2000, 1, 1),
        token_id="test-token",
        expires_at=NOW,
    )


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_find(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_service():
    return TokenService(secret=TEST_SECRET)


@pytest.fixture
def credential_store():
    return InMemoryCredentialStore()


@pytest.fixture
def make_session():
    """Factory for AuthenticatedSession values: make_session(user_id=2)."""
    return _session_for


# ══════════════════════════════════════════════════════════════════════════
# API-test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """A fresh SQLite database with every table created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'mygram_test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    from mygram.database import get_db_session
    from mygram.main import app

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_db_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
