"""
Integration tests for the catalog repositories and the soft-delete filter.
"""

from decimal import Decimal

from sqlalchemy import select, update

from catalog_service.app.models.category import Category
from catalog_service.app.models.product import Product
from catalog_service.app.repository import INCLUDE_DELETED, UnitOfWork


async def flag_deleted(session, model, entity_id):
    await session.execute(
        update(model).where(model.id == entity_id).values(is_deleted=True)
    )
    await session.commit()


class TestBaseRepository:
    async def test_reads_exclude_deleted_rows(self, session, catalog):
        uow = UnitOfWork(session)
        await flag_deleted(session, Category, catalog["science_id"])

        assert await uow.categories.get_by_id(catalog["science_id"]) is None
        assert not await uow.categories.exists(catalog["science_id"])
        assert await uow.categories.count() == 1
        assert [c.name for c in await uow.categories.get_all()] == ["Fiction"]
        assert await uow.categories.find(Category.name == "Science") == []

    async def test_include_deleted_option_reads_flagged_rows(self, session, catalog):
        await flag_deleted(session, Category, catalog["science_id"])

        result = await session.execute(
            select(Category)
            .where(Category.id == catalog["science_id"])
            .execution_options(**{INCLUDE_DELETED: True})
        )
        category = result.scalar_one()

        assert category.is_deleted is True

    async def test_get_by_id_missing_returns_none(self, session, catalog):
        uow = UnitOfWork(session)

        assert await uow.products.get_by_id(9999) is None
        assert await uow.products.delete(9999) is False

    async def test_get_paged_orders_by_id(self, session, catalog):
        uow = UnitOfWork(session)
        for name in ("Zoology", "Art", "Music"):
            await uow.categories.add(Category(name=name))
        await uow.save_changes()

        first_page, total = await uow.categories.get_paged(1, 2)
        second_page, _ = await uow.categories.get_paged(2, 2)

        assert total == 5
        assert [c.name for c in first_page] == ["Fiction", "Science"]
        assert [c.name for c in second_page] == ["Zoology", "Art"]


class TestCategoryRepository:
    async def test_paged_sorted_by_display_order_then_name(self, session):
        uow = UnitOfWork(session)
        for name, order in [("Poetry", 2), ("Drama", 2), ("Art", 5), ("Travel", 1)]:
            await uow.categories.add(Category(name=name, display_order=order))
        await uow.save_changes()

        items, total = await uow.categories.get_paged_sorted(1, 10)
        again, _ = await uow.categories.get_paged_sorted(1, 10)

        assert total == 4
        assert [c.name for c in items] == ["Travel", "Drama", "Poetry", "Art"]
        assert [c.id for c in again] == [c.id for c in items]

    async def test_name_exists_is_case_insensitive(self, session, catalog):
        uow = UnitOfWork(session)

        assert await uow.categories.name_exists("Fiction")
        assert await uow.categories.name_exists("  fiction ")
        assert not await uow.categories.name_exists("Poetry")

    async def test_name_exists_can_exclude_own_id(self, session, catalog):
        uow = UnitOfWork(session)

        assert not await uow.categories.name_exists(
            "Fiction", exclude_id=catalog["fiction_id"]
        )
        assert await uow.categories.name_exists(
            "Fiction", exclude_id=catalog["science_id"]
        )

    async def test_name_of_deleted_category_is_free(self, session, catalog):
        uow = UnitOfWork(session)
        await flag_deleted(session, Category, catalog["science_id"])

        assert not await uow.categories.name_exists("Science")


class TestProductRepository:
    async def test_reads_resolve_category(self, session, catalog):
        uow = UnitOfWork(session)

        product = await uow.products.get_by_id_with_category(catalog["book_id"])
        everything = await uow.products.get_all_with_category()
        page, total = await uow.products.get_paged_with_category(1, 5)

        assert product.category.name == "Fiction"
        assert [p.category.name for p in everything] == ["Fiction"]
        assert total == 1
        assert page[0].category.name == "Fiction"

    async def test_deleted_category_resolves_to_none(self, session, catalog):
        uow = UnitOfWork(session)
        await flag_deleted(session, Category, catalog["fiction_id"])

        product = await uow.products.get_by_id_with_category(catalog["book_id"])

        assert product is not None
        assert product.category is None

    async def test_get_by_category_id_skips_deleted_products(self, session, catalog):
        uow = UnitOfWork(session)
        await uow.products.add(
            Product(
                title="Second",
                author="A. Writer",
                price=Decimal("10"),
                category_id=catalog["fiction_id"],
            )
        )
        await uow.save_changes()
        await flag_deleted(session, Product, catalog["book_id"])

        products = await uow.products.get_by_category_id(catalog["fiction_id"])

        assert [p.title for p in products] == ["Second"]
        assert await uow.products.get_by_category_id(catalog["science_id"]) == []
