from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

import todoserver.db as db
from todoserver.db.models import Base
from todoserver.errors import ValidationFailed
from todoserver.resources import TODOS, USERS, ResourceDefinition
from todoserver.services import ResourceController
from todoserver.settings import get_settings

_COLLECTIONS: dict[str, ResourceDefinition] = {
    TODOS.collection: TODOS,
    USERS.collection: USERS,
}


async def _init_db() -> None:
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def _seed(definition: ResourceDefinition, path: Path) -> int:
    records = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(records, list):
        raise SystemExit(f"{path}: expected a JSON array of {definition.collection}")

    controller = ResourceController(definition, db.SessionMaker)
    inserted = 0
    for index, record in enumerate(records):
        try:
            await controller.create(record)
        except ValidationFailed as exc:
            raise SystemExit(f"{path}[{index}]: {exc.detail}") from exc
        inserted += 1
    return inserted


def _serve() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("todoserver.app:app", host=settings.host, port=settings.port)


def main() -> None:
    parser = argparse.ArgumentParser(prog="todoserver")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("init-db")
    sub.add_parser("serve")
    seed = sub.add_parser("seed")
    seed.add_argument("collection", choices=sorted(_COLLECTIONS))
    seed.add_argument("file", type=Path)

    args = parser.parse_args()

    if args.cmd == "init-db":
        asyncio.run(_init_db())
    elif args.cmd == "seed":
        inserted = asyncio.run(_seed(_COLLECTIONS[args.collection], args.file))
        print(f"Inserted {inserted} {args.collection}")
    elif args.cmd == "serve":
        _serve()
    else:
        raise SystemExit(2)
