"""Initial catalog content loaded into an empty database"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import async_sessionmaker

from ..models.category import Category
from ..models.product import Product
from ..repository.unit_of_work import UnitOfWork
from ..utils.logging import setup_catalog_logging as setup_logging

logger = setup_logging("catalog_service.seed")

SEED_CATEGORIES = [
    ("Fiction", 1),
    ("Science", 2),
    ("Technology", 3),
    ("Biography", 4),
    ("History", 5),
]

# (title, description, author, price, category name)
SEED_PRODUCTS = [
    ("The Great Adventure", "An exciting fiction novel", "John Smith", "29.99", "Fiction"),
    ("Physics Fundamentals", "Basic principles of physics", "Dr. Sarah Wilson", "45.50", "Science"),
    ("Modern Web Development", "Complete guide to web technologies", "Mike Johnson", "55.00", "Technology"),
    ("Steve Jobs Biography", "Life story of Apple founder", "Walter Isaacson", "35.99", "Biography"),
    ("World War II Chronicles", "Comprehensive history of WWII", "Robert Miller", "42.75", "History"),
]


async def seed_catalog(session_maker: async_sessionmaker) -> bool:
    """Insert the starter catalog. Does nothing if any category exists."""
    async with session_maker() as session:
        async with UnitOfWork(session) as uow:
            if await uow.categories.count() > 0:
                logger.info("Catalog already populated, skipping seed")
                return False

            categories = {}
            for name, display_order in SEED_CATEGORIES:
                category = Category(name=name, display_order=display_order)
                await uow.categories.add(category)
                categories[name] = category
            await uow.save_changes()

            for title, description, author, price, category_name in SEED_PRODUCTS:
                await uow.products.add(
                    Product(
                        title=title,
                        description=description,
                        author=author,
                        price=Decimal(price),
                        category_id=categories[category_name].id,
                    )
                )
            await uow.save_changes()

    logger.info(
        "Catalog seeded",
        extra={"categories": len(SEED_CATEGORIES), "products": len(SEED_PRODUCTS)},
    )
    return True
