"""Translation of service outcomes into HTTP responses"""

import math
from typing import Any, Dict

from fastapi import HTTPException, Response, status

from ..services.results import ResultStatus, ServiceResult

_STATUS_CODES = {
    ResultStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ResultStatus.CONFLICT: status.HTTP_409_CONFLICT,
    ResultStatus.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ResultStatus.INFRASTRUCTURE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def raise_for_result(result: ServiceResult) -> None:
    """Raise the HTTPException matching a non-OK result; OK results pass through"""
    if result.is_ok:
        return
    raise HTTPException(
        status_code=_STATUS_CODES[result.status],
        detail=result.message or result.status.value,
    )


def ensure_positive_id(value: int, name: str = "id") -> None:
    if value <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {name}: must be a positive integer.",
        )


def set_pagination_headers(
    response: Response, total_count: int, page: int, page_size: int
) -> None:
    response.headers["X-Total-Count"] = str(total_count)
    response.headers["X-Page"] = str(page)
    response.headers["X-Page-Size"] = str(page_size)


def pagination_meta(total_count: int, page: int, page_size: int) -> Dict[str, Any]:
    return {
        "page": page,
        "page_size": page_size,
        "total_count": total_count,
        "total_pages": math.ceil(total_count / page_size) if page_size else 0,
    }
