"""
Catalog Service configuration
"""

from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the catalog service directory path
CATALOG_SERVICE_DIR = Path(__file__).parent.parent.parent
ENV_FILE = CATALOG_SERVICE_DIR / ".env"


class CatalogSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Catalog Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Service specific
    SERVICE_NAME: str = "catalog-service"

    # Database
    CATALOG_DATABASE_URL: str = "sqlite+aiosqlite:///./catalog.db"
    TEST_DATABASE_URL: Optional[str] = None
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20
    SEED_DATA: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_CREDENTIALS: bool = False
    CORS_METHODS: List[str] = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    CORS_HEADERS: List[str] = ["*"]

    # Caching
    CATEGORY_CACHE_TTL_SECONDS: int = 30 * 60
    CACHE_MAX_SIZE: int = 1000

    # Paging
    DEFAULT_PAGE_SIZE: int = 5

    # API versioning
    API_DEFAULT_VERSION: str = "1.0"
    API_SUPPORTED_VERSIONS: List[str] = ["1.0", "2.0"]


# Create a singleton instance
_settings_instance = None


def get_settings() -> CatalogSettings:
    """Get settings singleton instance"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = CatalogSettings()
    return _settings_instance
