"""
db/base.py
----------
Declarative base and shared mixins.

CreatedAtMixin:  created_at column, set in Python so rows inserted within
                 the same second still order deterministically; the server
                 default covers rows written outside the ORM.
OwnedMixin:      user_id foreign key carried by every tenant-owned table.
                 TenantScopedRepository filters on this column and nothing
                 else, so every owned model must use the mixin.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UUIDPrimaryKeyMixin:
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)


class CreatedAtMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )


class OwnedMixin:
    """Marks a table as tenant data: one owning user per row."""

    @declared_attr
    def user_id(cls) -> Mapped[str]:
        return mapped_column(
            String(36),
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
