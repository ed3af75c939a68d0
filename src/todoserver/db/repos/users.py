from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from todoserver.db.models import User
from todoserver.db.repos.base import DocumentRepository


class UserRepository(DocumentRepository[User]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)
