from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cardbinder.db.database import get_session
from cardbinder.filtering import clear_facet_cache
from cardbinder.main import app
from cardbinder.models.card import Card
from cardbinder.models.db import Base
from cardbinder.services.image_store import ImageStore, get_image_store


@pytest.fixture(autouse=True)
def reset_facet_cache():
    """Start every test with an empty facet memo so cache assertions are isolated."""
    clear_facet_cache()
    yield
    clear_facet_cache()


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
def image_store(tmp_path: Path) -> ImageStore:
    return ImageStore(root=tmp_path / "images", base_url="/images", max_bytes=1024)


@pytest.fixture
async def client(async_engine, image_store: ImageStore):
    """Provide an async test client with overridden database session and image store."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_image_store] = lambda: image_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def trout() -> Card:
    return Card(
        id="card-trout",
        user_id="user-1",
        player_name="Mike Trout",
        year=2011,
        card_set="Topps",
        card_type="Update",
        grading_company="PSA",
        grade_value="10",
        condition="Mint",
    )


@pytest.fixture
def acuna() -> Card:
    return Card(
        id="card-acuna",
        user_id="user-1",
        player_name="Ronald Acuna",
        year=2018,
        card_set="Bowman",
        card_type="Chrome",
        grading_company="Raw",
        condition="Near Mint",
        notes="Rookie card, pulled from a hobby box",
    )


@pytest.fixture
def sample_records(trout: Card, acuna: Card) -> list[Card]:
    """Two-card collection, newest first as the record store returns it."""
    return [trout, acuna]
