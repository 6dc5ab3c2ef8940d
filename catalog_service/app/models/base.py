from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, false
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class CatalogServiceBase(DeclarativeBase):
    """Base class for all Catalog Service database models."""

    pass


class CatalogServiceBaseModel(CatalogServiceBase):
    """Base model with common fields for Catalog Service."""

    __abstract__ = True
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class SoftDeleteMixin:
    """Rows are flagged as deleted instead of being removed.

    Reads filter flagged rows out globally, see
    ``app.repository.soft_delete``.
    """

    is_deleted: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), default=_utcnow, onupdate=_utcnow, nullable=False
    )
