"""
Pytest configuration and fixtures for catalog service tests.
"""

import os
from decimal import Decimal
from typing import Any, AsyncGenerator, Dict

import pytest

# Set up test environment variables before importing anything else
os.environ.setdefault("APP_NAME", "Catalog Service Test")
os.environ.setdefault("APP_VERSION", "1.0.0")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SERVICE_NAME", "catalog-service")
os.environ.setdefault("CATALOG_DATABASE_URL", "sqlite+aiosqlite:///./catalog_test.db")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite+aiosqlite:///./catalog_test.db")
os.environ.setdefault("SEED_DATA", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from catalog_service.app.core.database import CatalogDatabaseManager  # noqa: E402
from catalog_service.app.models.category import Category  # noqa: E402
from catalog_service.app.models.product import Product  # noqa: E402
from catalog_service.app.repository.unit_of_work import UnitOfWork  # noqa: E402
from catalog_service.app.services.cache import InMemoryCache  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock for TTL tests"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> InMemoryCache:
    """Fresh category cache per test, never the process-wide one"""
    return InMemoryCache(max_size=100, default_ttl=1800, clock=clock)


@pytest.fixture
async def database(tmp_path) -> AsyncGenerator[CatalogDatabaseManager, None]:
    """Per-test SQLite file database with the catalog schema created."""
    manager = CatalogDatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
async def session(database: CatalogDatabaseManager) -> AsyncGenerator[Any, None]:
    async with database.async_session_maker() as db_session:
        yield db_session


@pytest.fixture
async def other_session(database: CatalogDatabaseManager) -> AsyncGenerator[Any, None]:
    """Independent session on the same database, for checking committed state."""
    async with database.async_session_maker() as db_session:
        yield db_session


@pytest.fixture
async def catalog(database: CatalogDatabaseManager) -> Dict[str, Any]:
    """Two categories and one product, committed through a separate session."""
    async with database.async_session_maker() as db_session:
        uow = UnitOfWork(db_session)
        fiction = Category(name="Fiction", display_order=1)
        science = Category(name="Science", display_order=2)
        await uow.categories.add(fiction)
        await uow.categories.add(science)
        await uow.save_changes()

        book = Product(
            title="The Great Adventure",
            description="An exciting fiction novel",
            author="John Smith",
            price=Decimal("29.99"),
            category_id=fiction.id,
        )
        await uow.products.add(book)
        await uow.save_changes()

        return {"fiction_id": fiction.id, "science_id": science.id, "book_id": book.id}
