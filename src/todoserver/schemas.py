"""JSON document shapes returned to clients.

Each schema is the explicit mapping from a stored row to the document a
client sees; the primary key is published as ``_id``.
"""

from __future__ import annotations

import uuid

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class StoredDocument(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
    )


class TodoDocument(StoredDocument):
    owner: str
    status: bool
    body: str
    category: str


class UserDocument(StoredDocument):
    name: str
    age: int
    company: str
    role: str
    email: str
    avatar: str


class CreatedResponse(BaseModel):
    id: uuid.UUID
