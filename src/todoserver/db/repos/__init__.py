"""Repository layer.

These repositories encapsulate the store calls for each collection.
Keep them focused on persistence/query shaping; request handling lives in services.
"""

from todoserver.db.repos.base import DocumentRepository
from todoserver.db.repos.todos import TodoRepository
from todoserver.db.repos.users import UserRepository

__all__ = [
    "DocumentRepository",
    "TodoRepository",
    "UserRepository",
]
