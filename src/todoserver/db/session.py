from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from todoserver.settings import get_settings


def create_store(database_url: str) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Build the process-wide engine and the session maker handed to controllers."""
    store_engine = create_async_engine(database_url, future=True)
    return store_engine, async_sessionmaker(store_engine, expire_on_commit=False)


engine, SessionMaker = create_store(get_settings().database_url)
