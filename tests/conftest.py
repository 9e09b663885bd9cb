"""Pytest fixtures for database testing."""

import os
from collections.abc import AsyncGenerator, Iterator
from decimal import Decimal
from typing import Any

# Keep password hashing fast; must be set before settings are first loaded
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from catalog_search.api.app import app
from catalog_search.db.base import Base, get_db
from catalog_search.db.models import Product
from catalog_search.sample_data import SAMPLE_PRODUCTS
from catalog_search.services.auth import create_admin, create_session
from catalog_search.services.search_service import get_search_cache


# Use SQLite in-memory for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def clear_search_cache() -> Iterator[None]:
    """The result cache is process-wide; start every test empty."""
    get_search_cache().clear()
    yield
    get_search_cache().clear()


@pytest_asyncio.fixture
async def test_db() -> AsyncGenerator[AsyncSession, None]:
    """Provide a test database session with isolated transactions.

    Creates an in-memory SQLite database, creates all tables,
    and yields a session. Overrides app's get_db dependency.
    """
    # Create test engine
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session
    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        # Override app's get_db dependency
        async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

        app.dependency_overrides[get_db] = override_get_db

        try:
            yield session
        finally:
            # Clean up
            app.dependency_overrides.clear()
            await session.rollback()

    # Drop all tables after test
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client talking to the app in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as http_client:
        yield http_client


@pytest_asyncio.fixture
async def sample_products(test_db: AsyncSession) -> list[Product]:
    """The sample catalog stored in the test database."""
    products = [Product(**data) for data in SAMPLE_PRODUCTS]
    test_db.add_all(products)
    await test_db.commit()
    return products


@pytest_asyncio.fixture
async def admin_token(test_db: AsyncSession) -> str:
    """Bearer token for a freshly created admin."""
    user = await create_admin(test_db, "admin", "admin@example.com", "correct-horse")
    admin_session = await create_session(test_db, user)
    await test_db.commit()
    return admin_session.token


@pytest.fixture
def auth_headers(admin_token: str) -> dict[str, str]:
    """Authorization header for the admin fixture."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def make_product():
    """Factory for unsaved product rows with minimal valid values."""

    def _make(**overrides: Any) -> Product:
        data: dict[str, Any] = {
            "slug": "test-product",
            "name": "Test Product",
            "description": "A product used in tests",
            "price": Decimal("100.00"),
            "category": "test-category",
            "domain": "test-domain",
            "tags": [],
            "features": [],
            "specifications": {},
        }
        data.update(overrides)
        return Product(**data)

    return _make
