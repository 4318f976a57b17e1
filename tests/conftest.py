"""Root conftest: async DB + FastAPI test client shared by all test packages.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - db_manager patched so code reading it directly sees the test engine
    - Lifespan is not run: no startup probe, no migrations against a real server
"""

import os

os.environ.setdefault("DATABASE_HOST", "localhost:5432")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

import products_crud.infrastructure.database as db_module
import products_crud.models  # noqa: F401
from products_crud.db.base import Base
from products_crud.infrastructure.database import get_db, DatabaseSessionManager
from products_crud.main import app
from products_crud.models.product import ProductModel


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_product(test_db):
    """Insert one product directly into the test DB."""
    row = ProductModel(
        name="Macbook 2021", supplier_id=1, category_id=1,
        stock=50, price=3200.56, discontinued=False,
    )
    test_db.add(row)
    await test_db.commit()
    await test_db.refresh(row)
    return row
