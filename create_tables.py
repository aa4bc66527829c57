"""
create_tables.py
----------------
One-shot script to create all database tables.
Use this for quick setup. For production migrations, use Alembic instead.

Usage:
    python create_tables.py
"""

import asyncio

from reviewdesk.core.config import settings
from reviewdesk.core.logging import configure_logging, get_logger
from reviewdesk.db.session import build_engine
from reviewdesk.models import Base  # Imports all models so metadata is populated

logger = get_logger(__name__)


async def create_all_tables() -> None:
    engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()
    logger.info("Tables created", tables=sorted(Base.metadata.tables))


if __name__ == "__main__":
    configure_logging()
    asyncio.run(create_all_tables())
