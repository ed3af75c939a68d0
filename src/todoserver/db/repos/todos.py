from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from todoserver.db.models import Todo
from todoserver.db.repos.base import DocumentRepository


class TodoRepository(DocumentRepository[Todo]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Todo)
