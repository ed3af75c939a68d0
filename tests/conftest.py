from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

import todoserver.db as db
from todoserver.app import create_app
from todoserver.db.models import Base, Todo


@pytest.fixture
async def test_engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    db_path = tmp_path / "test.db"
    engine, session_maker = db.create_store(f"sqlite+aiosqlite:///{db_path}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    db.SessionMaker = session_maker

    yield engine

    await engine.dispose()


@pytest.fixture
async def client(test_engine: AsyncEngine) -> AsyncIterator[AsyncClient]:
    _ = test_engine
    app = create_app()
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


@pytest.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    _ = test_engine
    async with db.SessionMaker() as session:
        yield session


SEED_TODOS = (
    {"owner": "Chris", "category": "Homework", "status": True, "body": "Random words for testing"},
    {"owner": "Lucy", "category": "Software Design", "status": True, "body": "Dog parks are for dogs"},
    {"owner": "Fernando", "category": "Homework", "status": False, "body": "Computers are for humans"},
)


@pytest.fixture
async def seeded_todos(db_session: AsyncSession) -> list[Todo]:
    todos = [Todo(**values) for values in SEED_TODOS]
    db_session.add_all(todos)
    await db_session.commit()
    return todos
