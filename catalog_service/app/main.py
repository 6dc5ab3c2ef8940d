"""
Catalog Service FastAPI Application
===================================

Entry point of the Catalog Service: categories and books over a versioned
REST API. ``/api/...`` requests without a version segment are routed by
the versioning middleware.
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Tuple

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.categories import router as categories_router
from .api.v1.health import router as health_router
from .api.v1.products import router as products_router
from .api.v2.products import router as products_v2_router
from .core.database import database_manager
from .core.seed import seed_catalog
from .core.setting import get_settings
from .middleware.api.versioning import APIVersioningMiddleware
from .middleware.error.error_handler import setup_catalog_error_handling
from .utils.logging import setup_catalog_logging

settings = get_settings()

logger = setup_catalog_logging(
    "catalog_service",
    log_level=settings.LOG_LEVEL,
    enable_file_logging=settings.ENVIRONMENT.lower() in ("production", "staging"),
)

# (router, prefix, tag); categories behave the same in every API version
ROUTES: List[Tuple[APIRouter, str, str]] = [
    (health_router, "", "Health"),
    (categories_router, "/api/v1", "Categories"),
    (categories_router, "/api/v2", "Categories"),
    (products_router, "/api/v1", "Products"),
    (products_v2_router, "/api/v2", "Products v2"),
]

EXPOSED_HEADERS = ["X-Total-Count", "X-Page", "X-Page-Size", "X-API-Version"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the schema and seed on startup, release the engine on shutdown."""
    started = time.time()
    try:
        await database_manager.create_tables()
        if settings.SEED_DATA:
            await seed_catalog(database_manager.async_session_maker)
    except Exception as e:
        logger.error(
            "Failed to start catalog service",
            exc_info=True,
            extra={"error_type": type(e).__name__},
        )
        raise

    logger.info(
        "Catalog service started",
        extra={
            "environment": settings.ENVIRONMENT,
            "service_version": settings.APP_VERSION,
            "seed_enabled": settings.SEED_DATA,
            "startup_duration_ms": int((time.time() - started) * 1000),
        },
    )

    yield

    await database_manager.close()
    logger.info("Catalog service stopped")


def create_app() -> FastAPI:
    """Application factory."""
    application = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
    )

    setup_catalog_error_handling(application)

    # Added last runs first: CORS wraps versioning
    application.add_middleware(
        APIVersioningMiddleware,
        default_version=settings.API_DEFAULT_VERSION,
        supported_versions=settings.API_SUPPORTED_VERSIONS,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_CREDENTIALS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
        expose_headers=EXPOSED_HEADERS,
    )

    for router, prefix, tag in ROUTES:
        application.include_router(router, prefix=prefix, tags=[tag])

    logger.info(
        "Catalog service application configured",
        extra={
            "routes": [f"{prefix or '/'}:{tag}" for _, prefix, tag in ROUTES],
            "api_versions": settings.API_SUPPORTED_VERSIONS,
            "cors_origins": len(settings.CORS_ORIGINS),
        },
    )
    return application


app = create_app()
