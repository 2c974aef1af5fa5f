"""Shared test fixtures: an in-memory API and a fake transport for console controllers."""

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from nikah_api.core import create_access_token, hash_password, limiter
from nikah_api.db.models import User
from nikah_api.db.session import Base
from nikah_api.dependencies import get_db
from nikah_api.main import app as fastapi_app
from nikah_console.client import ApiClient

from tests.unit.fakes import FakeApi

PASSWORD = "Passw0rd!"

MakeUser = Callable[..., Awaitable[tuple[User, dict[str, str]]]]


@pytest.fixture
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    await engine.dispose()


@pytest.fixture
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    """A session for seeding and inspecting rows directly. Commit after seeding."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory: async_sessionmaker[AsyncSession]):
    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db] = override_get_db
    limiter.reset()
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def transport(app) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=app)


@pytest.fixture
async def client(transport: httpx.ASGITransport) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def make_user(session_factory: async_sessionmaker[AsyncSession]) -> MakeUser:
    """Create a user row; returns it with bearer headers."""
    counter = {"n": 0}

    async def _make(role: str = "USER", **fields: Any) -> tuple[User, dict[str, str]]:
        counter["n"] += 1
        fields.setdefault("email", f"user{counter['n']}@example.com")
        fields.setdefault("name", f"User {counter['n']}")
        async with session_factory() as session:
            user = User(role=role, hashed_password=hash_password(PASSWORD), **fields)
            session.add(user)
            await session.commit()
            await session.refresh(user)
        token = create_access_token(user.id, role=user.role)
        return user, {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
async def admin_headers(make_user: MakeUser) -> dict[str, str]:
    _admin, headers = await make_user("SUPER_ADMIN", email="admin@example.com", name="Admin")
    return headers


@pytest.fixture
async def user_headers(make_user: MakeUser) -> dict[str, str]:
    _user, headers = await make_user("USER", email="member@example.com", name="Member", phone="+923001234567")
    return headers


@pytest.fixture
def api_client(transport: httpx.ASGITransport, admin_headers: dict[str, str]) -> ApiClient:
    """Console client talking to the in-memory API as a super admin."""
    token = admin_headers["Authorization"].removeprefix("Bearer ")
    return ApiClient("http://test", token=token, transport=transport)


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()
