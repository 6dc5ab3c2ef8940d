"""
Integration tests for the starter catalog seed.
"""

from catalog_service.app.core.seed import SEED_CATEGORIES, SEED_PRODUCTS, seed_catalog
from catalog_service.app.repository import UnitOfWork


class TestSeedCatalog:
    async def test_seeds_empty_database(self, database):
        seeded = await seed_catalog(database.async_session_maker)

        async with database.async_session_maker() as session:
            uow = UnitOfWork(session)
            products = await uow.products.get_all_with_category()
            assert await uow.categories.count() == len(SEED_CATEGORIES)

        assert seeded is True
        assert len(products) == len(SEED_PRODUCTS)
        assert {p.category.name for p in products} == {
            name for name, _ in SEED_CATEGORIES
        }

    async def test_does_not_seed_twice(self, database):
        await seed_catalog(database.async_session_maker)

        seeded_again = await seed_catalog(database.async_session_maker)

        async with database.async_session_maker() as session:
            assert await UnitOfWork(session).categories.count() == len(SEED_CATEGORIES)
        assert seeded_again is False
