"""Shared fixtures: in-memory database, ASGI client and bearer tokens."""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["STORAGE_BUCKET"] = "test-bucket"
os.environ["MESSAGE_LOCALE"] = "en"
os.environ["PUBLIC_CATALOG_READS"] = "true"

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import marketplace.models  # noqa: F401
from marketplace.core.database import get_async_session
from marketplace.dao.user_dao import user_dao
from tests.utils import bearer


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    session_maker = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def async_client(db_session):
    from httpx import ASGITransport, AsyncClient

    from marketplace.main import app

    async def override_session():
        yield db_session

    app.dependency_overrides[get_async_session] = override_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user(db_session):
    return await user_dao.create(
        db_session,
        obj_in={
            "userName": "alice",
            "email": "alice@example.com",
            "name": "Alice",
            "address": "Cairo",
            "companyName": "Alice Studio",
            "companyUrl": "https://alice.example.com",
            "plan": "free",
        },
    )


@pytest.fixture
def auth_headers(user):
    return bearer(user.id)
