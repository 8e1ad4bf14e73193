"""
Agora Backend — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets its own SQLite file (aiosqlite) under tmp_path with
       the full schema, so tests never share rows. The API client swaps
       the app's get_db_session for one bound to that test database.

Fixture Hierarchy (all function-scoped):
    db_engine ──┬── session_factory ──┬── db_session ── alice / bob
                │                     └── test_client
                └── (disposed after the test)
"""

import os

# Must be set before any app import: app.config.settings is built on import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.database import build_engine, create_all_tables, get_db_session
from app.models.user import User
from app.services.credentials import credential_manager

DEFAULT_PASSWORD = "secret1"


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'agora_test.db'}")
    await create_all_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """
    A session for service-level tests.

    Services only flush; nothing is committed, so every assertion in the
    test reads through the same transaction.
    """
    async with session_factory() as session:
        yield session


async def _insert_user(session, username: str, email: str, full_name: str = "Test User") -> User:
    user = User(
        username=username,
        email=email,
        password=credential_manager.hash_password(DEFAULT_PASSWORD),
        full_name=full_name,
    )
    session.add(user)
    await session.flush()
    return user


@pytest_asyncio.fixture
async def alice(db_session) -> User:
    return await _insert_user(db_session, "alice1", "alice@example.com", "Alice A")


@pytest_asyncio.fixture
async def bob(db_session) -> User:
    return await _insert_user(db_session, "bob2", "bob@example.com", "Bob B")


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    Every request gets a fresh session on the per-test database that is
    committed or rolled back exactly like the production dependency.
    """
    from app.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_db_session, None)


@pytest.fixture
def user_factory(db_session):
    """Insert extra users: `await user_factory("carol3", "carol@example.com")`."""

    async def create(username: str, email: str, full_name: str = "Test User") -> User:
        return await _insert_user(db_session, username, email, full_name)

    return create
