from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from todoserver.errors import MalformedId, NotFound
from todoserver.logging_config import log_with_fields
from todoserver.query import build_filter, ordering_from_params
from todoserver.resources import ResourceDefinition
from todoserver.schemas import StoredDocument
from todoserver.validation import validate

logger = logging.getLogger("todoserver.resources")


class ResourceController:
    """Read, list, create and delete records of one collection.

    Holds no per-request state; every operation opens its own session from the
    injected session maker and makes a single store call.
    """

    def __init__(
        self,
        definition: ResourceDefinition,
        session_maker: async_sessionmaker[AsyncSession],
    ) -> None:
        self.definition = definition
        self.session_maker = session_maker

    def parse_id(self, raw_id: str) -> uuid.UUID:
        try:
            return uuid.UUID(raw_id)
        except ValueError as exc:
            raise MalformedId(self.definition.name, raw_id) from exc

    async def get(self, raw_id: str) -> StoredDocument:
        record_id = self.parse_id(raw_id)
        async with self.session_maker() as session:
            obj = await self.definition.repository(session).find_one(record_id)
        if obj is None:
            raise NotFound(self.definition.name)
        return self.definition.document.model_validate(obj)

    async def list(self, params: Mapping[str, str]) -> list[StoredDocument]:
        predicate = build_filter(params, self.definition.filter_fields)
        ordering = ordering_from_params(params, default_field=self.definition.default_sort)
        async with self.session_maker() as session:
            objs = await self.definition.repository(session).find(predicate, ordering)
        return [self.definition.document.model_validate(obj) for obj in objs]

    async def create(self, body: Any) -> uuid.UUID:
        record = validate(body, self.definition.rules)
        if self.definition.derive is not None:
            record = self.definition.derive(record)
        async with self.session_maker() as session:
            record_id = await self.definition.repository(session).insert_one(record)
        log_with_fields(
            logger,
            logging.INFO,
            "record created",
            collection=self.definition.collection,
            record_id=record_id,
        )
        return record_id

    async def delete(self, raw_id: str) -> None:
        record_id = self.parse_id(raw_id)
        async with self.session_maker() as session:
            removed = await self.definition.repository(session).delete_one(record_id)
        # Deleting an absent id is still a success.
        log_with_fields(
            logger,
            logging.INFO,
            "record delete",
            collection=self.definition.collection,
            record_id=record_id,
            removed=removed,
        )
