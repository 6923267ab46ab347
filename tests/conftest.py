"""Root conftest -- shared fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The app's lifespan is not run; fixtures populate app.state directly
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Keep tests independent of a developer's .env or shell
os.environ.setdefault("CAPREST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from caprest.app import create_app  # noqa: E402
from caprest.config import Settings  # noqa: E402
from caprest.models import Base, PetRecord  # noqa: E402
from caprest.repository import SQLAlchemyRepository  # noqa: E402
from caprest.schemas.pet import Pet  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def pet_repository(test_session_factory):
    return SQLAlchemyRepository(test_session_factory, PetRecord, Pet)


@pytest.fixture
async def app(test_session_factory, pet_repository):
    app = create_app(Settings(create_schema=False, pet_max_age=10))
    app.state.session_factory = test_session_factory
    app.state.pet_repository = pet_repository
    return app


@pytest.fixture
async def client(app):
    """HTTP client talking to the app in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
