"""Typed outcomes returned by the catalog services"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from .exceptions import (
    CatalogDomainError,
    ConflictError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationFailedError,
)

T = TypeVar("T")


class ResultStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION_FAILED = "validation_failed"
    INFRASTRUCTURE_FAILURE = "infrastructure_failure"


class ConflictReason(str, Enum):
    CONFLICT = "conflict"
    REFERENTIAL = "referential"


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Outcome of a service operation.

    ``value`` is only set for OK results. ``total_count`` is set for list
    operations and counts the whole collection, not the returned page.
    ``message`` is informational; callers branch on ``status`` and
    ``reason`` only.
    """

    status: ResultStatus
    value: Optional[T] = None
    message: Optional[str] = None
    reason: Optional[ConflictReason] = None
    total_count: Optional[int] = None

    @property
    def is_ok(self) -> bool:
        return self.status is ResultStatus.OK

    @property
    def is_referential_conflict(self) -> bool:
        return (
            self.status is ResultStatus.CONFLICT
            and self.reason is ConflictReason.REFERENTIAL
        )

    @classmethod
    def ok(cls, value: Optional[T] = None, total_count: Optional[int] = None) -> "ServiceResult[T]":
        return cls(ResultStatus.OK, value=value, total_count=total_count)

    @classmethod
    def not_found(cls, message: Optional[str] = None) -> "ServiceResult[T]":
        return cls(ResultStatus.NOT_FOUND, message=message)

    @classmethod
    def conflict(
        cls, message: str, reason: ConflictReason = ConflictReason.CONFLICT
    ) -> "ServiceResult[T]":
        return cls(ResultStatus.CONFLICT, message=message, reason=reason)

    @classmethod
    def validation_failed(cls, message: str) -> "ServiceResult[T]":
        return cls(ResultStatus.VALIDATION_FAILED, message=message)

    @classmethod
    def infrastructure_failure(cls, message: str) -> "ServiceResult[T]":
        return cls(ResultStatus.INFRASTRUCTURE_FAILURE, message=message)

    @classmethod
    def from_error(cls, error: CatalogDomainError) -> "ServiceResult[T]":
        if isinstance(error, NotFoundError):
            return cls.not_found(error.message)
        if isinstance(error, ReferentialIntegrityError):
            return cls.conflict(error.message, ConflictReason.REFERENTIAL)
        if isinstance(error, ConflictError):
            return cls.conflict(error.message)
        if isinstance(error, ValidationFailedError):
            return cls.validation_failed(error.message)
        raise TypeError(f"Unmapped domain error: {type(error).__name__}")
