"""
API Versioning middleware for Catalog Service
Supports path, query string and header based versioning
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Callable, List, Optional

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI

VERSION_HEADERS = ("X-Version", "X-API-Version")
VERSION_QUERY_PARAM = "version"

_VERSIONED_PATH = re.compile(r"^/api/v(?P<version>\d+(?:\.\d+)?)(?=/|$)")


class APIVersion:
    """API Version representation"""

    def __init__(self, major: int, minor: int = 0):
        self.major = major
        self.minor = minor

    def __str__(self) -> str:
        return f"v{self.major}.{self.minor}"

    def __repr__(self) -> str:
        return f"APIVersion({self.major}, {self.minor})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, APIVersion):
            return NotImplemented
        return (self.major, self.minor) == (other.major, other.minor)

    def __hash__(self) -> int:
        return hash((self.major, self.minor))

    def to_header_value(self) -> str:
        return f"{self.major}.{self.minor}"

    @classmethod
    def from_string(cls, version_str: str) -> "APIVersion":
        """Parse version string like 'v2', '1.0' or 'V1.0'.

        Raises:
            ValueError: if the string is not a version
        """
        parts = version_str.strip().lstrip("vV").split(".")
        if not parts[0] or len(parts) > 2:
            raise ValueError(f"Invalid API version '{version_str}'")

        major = int(parts[0])
        minor = int(parts[1]) if len(parts) > 1 else 0
        return cls(major, minor)


class APIVersioningMiddleware(BaseHTTPMiddleware):
    """Middleware to resolve the API version and route unversioned paths.

    Resolution order: URL segment (``/api/v2/...``), ``?version=`` query,
    then the ``X-Version`` and ``X-API-Version`` headers. Requests to
    ``/api/...`` without a version segment are rewritten onto
    ``/api/v{major}/...`` before routing.
    """

    def __init__(
        self,
        app: FastAPI,
        default_version: str = "1.0",
        supported_versions: Optional[List[str]] = None,
    ):
        super().__init__(app)
        self.default_version = APIVersion.from_string(default_version)
        self.supported_versions = [
            APIVersion.from_string(v) for v in (supported_versions or ["1.0", "2.0"])
        ]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:  # type: ignore[misc]
        """Process API versioning"""
        path = request.url.path
        if path != "/api" and not path.startswith("/api/"):
            return await call_next(request)  # type: ignore[misc]

        try:
            version, versioned_in_path = self._extract_version(request)
        except ValueError:
            return self._unsupported_response()

        if version not in self.supported_versions:
            return self._unsupported_response()

        if not versioned_in_path:
            self._rewrite_path(request, version)

        request.state.api_version = version

        response = await call_next(request)  # type: ignore[misc]

        response.headers["X-API-Version"] = version.to_header_value()  # type: ignore[misc]
        response.headers["X-Supported-Versions"] = ", ".join(  # type: ignore[misc]
            v.to_header_value() for v in self.supported_versions
        )
        return response  # type: ignore[misc]

    def _extract_version(self, request: Request) -> tuple[APIVersion, bool]:
        """Extract API version from request, flagging whether the path carried it"""
        # 1. Path prefix (e.g., /api/v1/...)
        match = _VERSIONED_PATH.match(request.url.path)
        if match:
            return APIVersion.from_string(match.group("version")), True

        # 2. Query string
        query_version = request.query_params.get(VERSION_QUERY_PARAM)
        if query_version:
            return APIVersion.from_string(query_version), False

        # 3. Headers
        for header in VERSION_HEADERS:
            header_version = request.headers.get(header)
            if header_version:
                return APIVersion.from_string(header_version), False

        # 4. Default version
        return self.default_version, False

    @staticmethod
    def _rewrite_path(request: Request, version: APIVersion) -> None:
        suffix = request.scope["path"][len("/api"):]
        new_path = f"/api/v{version.major}{suffix}"
        request.scope["path"] = new_path
        request.scope["raw_path"] = new_path.encode("utf-8")

    def _unsupported_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": "Unsupported API version",
                "supported_versions": [
                    v.to_header_value() for v in self.supported_versions
                ],
            },
        )


def get_api_version(request: Request) -> APIVersion:
    """Get API version from request state"""
    api_version = getattr(request.state, "api_version", None)
    return api_version if api_version is not None else APIVersion(1, 0)
