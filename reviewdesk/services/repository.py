"""
services/repository.py
----------------------
Tenant-scoped CRUD shared by every owned entity.

Critical security invariant:
  Every statement built here carries `model.user_id == user_id` through
  `_owned()`. Entity services subclass TenantScopedRepository instead of
  writing their own SELECT/UPDATE/DELETE, so a new endpoint cannot forget
  the filter.

Rows owned by another user are reported exactly like missing rows (None /
False); callers turn both into the same 404.

Updates and deletes are single conditional statements
(UPDATE ... WHERE id = :id AND user_id = :uid RETURNING ...), so there is no
window between an ownership check and the write.

Storage failures are re-raised as RepositoryError with the SQLAlchemy
exception chained as __cause__; they are never reported as "not found".
"""

from typing import Any, ClassVar, Dict, FrozenSet, Generic, List, Mapping, Optional, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reviewdesk.core.exceptions import RepositoryError
from reviewdesk.core.logging import get_logger
from reviewdesk.db.base import Base

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# Columns a caller may never set through create/update payloads
_PROTECTED_FIELDS = frozenset({"id", "user_id"})


class TenantScopedRepository(Generic[ModelT]):

    model: ClassVar[type]
    order_column: ClassVar[str] = "created_at"
    filterable: ClassVar[FrozenSet[str]] = frozenset()

    # ── Scoping ──────────────────────────────────────────────────────────────

    @classmethod
    def _owned(cls, user_id: str):
        return cls.model.user_id == user_id

    @classmethod
    def _by_id(cls, obj_id: str, user_id: str):
        return (cls.model.id == obj_id) & cls._owned(user_id)

    @classmethod
    def _clean(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in data.items() if k not in _PROTECTED_FIELDS}

    @classmethod
    async def _execute(cls, db: AsyncSession, stmt, action: str):
        try:
            return await db.execute(stmt)
        except SQLAlchemyError as exc:
            raise cls._storage_error(action, exc) from exc

    @classmethod
    def _storage_error(cls, action: str, exc: SQLAlchemyError) -> RepositoryError:
        table = cls.model.__tablename__
        logger.error("Storage operation failed", table=table, action=action, error=str(exc))
        return RepositoryError(f"{action} on {table} failed: {exc}")

    # ── Reads ────────────────────────────────────────────────────────────────

    @classmethod
    async def list(cls, db: AsyncSession, user_id: str, **filters: Any) -> List[ModelT]:
        """
        All rows owned by user_id, newest first.

        Keyword filters are equality matches on the columns named in
        `filterable`; a filter whose value is None is ignored.
        """
        unknown = set(filters) - cls.filterable
        if unknown:
            raise ValueError(f"Cannot filter {cls.model.__tablename__} by {sorted(unknown)}")

        criteria = [
            getattr(cls.model, name) == value
            for name, value in filters.items()
            if value is not None
        ]
        stmt = (
            select(cls.model)
            .where(cls._owned(user_id), *criteria)
            .order_by(getattr(cls.model, cls.order_column).desc())
        )
        result = await cls._execute(db, stmt, "list")
        return list(result.scalars().all())

    @classmethod
    async def get(cls, db: AsyncSession, obj_id: str, user_id: str) -> Optional[ModelT]:
        result = await cls._execute(
            db, select(cls.model).where(cls._by_id(obj_id, user_id)), "get"
        )
        return result.scalar_one_or_none()

    @classmethod
    async def count(cls, db: AsyncSession, user_id: str, *criteria) -> int:
        stmt = select(func.count()).select_from(cls.model).where(cls._owned(user_id), *criteria)
        result = await cls._execute(db, stmt, "count")
        return result.scalar_one()

    # ── Writes ───────────────────────────────────────────────────────────────

    @classmethod
    async def create(cls, db: AsyncSession, data: Mapping[str, Any], user_id: str) -> ModelT:
        """
        Persist a new row owned by user_id and return it with its generated
        id and timestamps loaded.
        """
        obj = cls.model(**cls._clean(data), user_id=user_id)
        db.add(obj)
        try:
            await db.flush()  # Trigger DB constraints before commit
            await db.refresh(obj)
        except SQLAlchemyError as exc:
            raise cls._storage_error("create", exc) from exc
        logger.info("Row created", table=cls.model.__tablename__, id=obj.id, user_id=user_id)
        return obj

    @classmethod
    async def update(
        cls,
        db: AsyncSession,
        obj_id: str,
        data: Mapping[str, Any],
        user_id: str,
    ) -> Optional[ModelT]:
        """
        Apply `data` (only the keys present) to the row if user_id owns it.
        Returns the updated row, or None when nothing matched.
        """
        values = cls._clean(data)
        if not values:
            return await cls.get(db, obj_id, user_id)

        stmt = (
            update(cls.model)
            .where(cls._by_id(obj_id, user_id))
            .values(**values)
            .returning(cls.model)
            .execution_options(populate_existing=True)
        )
        result = await cls._execute(db, stmt, "update")
        obj = result.scalar_one_or_none()
        if obj is not None:
            logger.info(
                "Row updated",
                table=cls.model.__tablename__,
                id=obj_id,
                user_id=user_id,
                fields=sorted(values),
            )
        return obj

    @classmethod
    async def delete(cls, db: AsyncSession, obj_id: str, user_id: str) -> bool:
        """True iff a row owned by user_id was removed."""
        result = await cls._execute(
            db, delete(cls.model).where(cls._by_id(obj_id, user_id)), "delete"
        )
        deleted = result.rowcount > 0
        if deleted:
            logger.info("Row deleted", table=cls.model.__tablename__, id=obj_id, user_id=user_id)
        return deleted
