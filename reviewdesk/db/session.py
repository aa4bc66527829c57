"""
db/session.py
-------------
Async SQLAlchemy engine and session factory.

Design decisions:
  - AsyncEngine with asyncpg driver in production; aiosqlite for local runs
    and tests (pool sizing arguments are skipped for SQLite, whose async
    dialect uses a pool that does not accept them).
  - pool_pre_ping=True: validates connections before checkout to handle
    stale connections after DB restarts or idle timeouts.
  - expire_on_commit=False: avoids lazy-load errors after commit in async
    context (attributes are already loaded, no implicit SELECT needed).
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from reviewdesk.core.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False, **overrides: Any) -> AsyncEngine:
    options: Dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=10,
            max_overflow=20,
            pool_recycle=3600,  # Recycle connections every hour
        )
    options.update(overrides)
    async_engine = create_async_engine(url, **options)
    if url.startswith("sqlite"):
        # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on
        event.listen(async_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return async_engine


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# ── Engine ────────────────────────────────────────────────────────────────────
engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# ── Session Factory ───────────────────────────────────────────────────────────
AsyncSessionLocal = build_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields one database session per request.
    Committed when the handler returns, rolled back if it raises.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
