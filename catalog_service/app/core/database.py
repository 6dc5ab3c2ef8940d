"""
Async database access for Catalog Service.

SQLite (aiosqlite) is the default store; any other URL is treated as a
pooled server database such as PostgreSQL (asyncpg).
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ..models.base import CatalogServiceBase
from ..repository import soft_delete  # noqa: F401  registers the global read filter
from ..utils.logging import setup_catalog_logging as setup_logging
from .setting import CatalogSettings, get_settings

logger = setup_logging("catalog_service.database", log_level=get_settings().LOG_LEVEL)


def _mask_url(database_url: str) -> str:
    return make_url(database_url).render_as_string(hide_password=True)


def engine_options(database_url: str, settings: CatalogSettings) -> Dict[str, Any]:
    """Engine keyword arguments for the given backend."""
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"connect_args": {"timeout": 60, "check_same_thread": False}}
    return {
        "pool_size": settings.DATABASE_POOL_SIZE,
        "max_overflow": settings.DATABASE_MAX_OVERFLOW,
        "pool_timeout": 45,
        "pool_recycle": 3600,
        "pool_pre_ping": True,
    }


class CatalogDatabaseManager:
    """Owns the async engine and the session factory of one catalog store."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        options = engine_options(database_url, get_settings())
        self.async_engine = create_async_engine(database_url, echo=echo, **options)
        self.async_session_maker = async_sessionmaker(
            bind=self.async_engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info(
            "Catalog database manager initialized",
            extra={
                "database_url": _mask_url(database_url),
                "backend": self.async_engine.dialect.name,
                "echo": echo,
                "event_type": "database_manager_initialization",
            },
        )

    async def create_tables(self) -> None:
        """Create missing catalog tables; existing ones are left alone."""
        async with self.async_engine.begin() as conn:
            await conn.run_sync(CatalogServiceBase.metadata.create_all, checkfirst=True)
        logger.info("Catalog tables ready", extra={"event_type": "database_tables_created"})

    async def ping(self) -> bool:
        async with self.async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def get_async_session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.async_session_maker() as session:
            yield session

    async def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        await self.async_engine.dispose()
        logger.info("Catalog database connections closed", extra={"event_type": "database_shutdown"})


settings = get_settings()
database_manager = CatalogDatabaseManager(
    database_url=settings.CATALOG_DATABASE_URL, echo=settings.DEBUG
)


# Dependency injection function for FastAPI
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for dependency injection."""
    async for session in database_manager.get_async_session():
        yield session
