"""
Shared fixtures: an in-memory SQLite database, repository / service
instances bound to it, and an HTTP client against the FastAPI app.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from auth.password import hash_password
from auth.repository import UserRepository
from auth.service import UserService
from database.models import Base, User
from database.session import get_db_session

STRONG_PASSWORD = "Str0ng!Pass"


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
def repository(session):
    return UserRepository(session)


@pytest.fixture
def service(repository):
    return UserService(repository)


@pytest.fixture
def make_user():
    """Factory for unsaved ``User`` rows with a real bcrypt hash."""

    def _make(user_id="alice", email=None, password=STRONG_PASSWORD, **kwargs):
        return User(
            user_id=user_id,
            display_name=kwargs.pop("display_name", user_id.title()),
            email=email or f"{user_id}@example.com",
            password_hash=hash_password(password) if password else None,
            is_active=kwargs.pop("is_active", True),
            **kwargs,
        )

    return _make


@pytest_asyncio.fixture
async def client(session_factory):
    from main import app

    async def _test_session():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_db_session] = _test_session
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
