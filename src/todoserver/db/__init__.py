from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from todoserver.db import session as _session

create_store = _session.create_store
engine: AsyncEngine = _session.engine

# Tests replace `todoserver.db.SessionMaker` before calling `create_app()`;
# the app and the CLI read it from here at construction time.
SessionMaker: async_sessionmaker[AsyncSession] = _session.SessionMaker

__all__ = [
    "SessionMaker",
    "create_store",
    "engine",
]
