from typing import Any, Dict

from fastapi import APIRouter, Response, status

from ...core.database import database_manager
from ...core.setting import get_settings
from ...utils.service_health import CatalogServiceHealthChecker, database_check

router = APIRouter()


@router.get("/health")
async def health_check(response: Response) -> Dict[str, Any]:
    """Liveness plus a round trip to the catalog store"""
    settings = get_settings()
    checker = CatalogServiceHealthChecker(settings.SERVICE_NAME)
    checker.add_check("database", database_check(database_manager.ping))

    report = await checker.run_checks()
    report["version"] = settings.APP_VERSION
    if report["status"] != "healthy":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return report
