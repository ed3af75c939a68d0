from __future__ import annotations

import json

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from todoserver.app import resource_error_handler
from todoserver.db.models import Todo
from todoserver.errors import ValidationFailed


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/api/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_request_id_header_is_propagated_or_generated(client: AsyncClient) -> None:
    with_header = await client.get("/api/health", headers={"X-Request-ID": "req-test-123"})
    assert with_header.headers["x-request-id"] == "req-test-123"

    generated = await client.get("/api/health")
    assert generated.headers.get("x-request-id")


@pytest.mark.asyncio
async def test_seeded_scenario_returns_single_intersection(
    client: AsyncClient, seeded_todos: list[Todo]
) -> None:
    resp = await client.get("/api/todos?category=Homework&status=true")

    assert resp.status_code == 200
    assert len(resp.json()) == 1


@pytest.mark.asyncio
async def test_store_failure_is_service_unavailable(
    client: AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    async def _broken_execute(self: AsyncSession, *args: object, **kwargs: object) -> None:
        raise OperationalError("SELECT", {}, Exception("unable to open database file"))

    monkeypatch.setattr(AsyncSession, "execute", _broken_execute)

    resp = await client.get("/api/todos")

    assert resp.status_code == 503
    assert resp.json() == {"detail": "The data store is unavailable; try again later."}


@pytest.mark.asyncio
async def test_resource_error_handler_renders_violations() -> None:
    request = Request({"type": "http", "method": "POST", "path": "/api/todos", "headers": []})

    resp = await resource_error_handler(request, ValidationFailed(["a", "b"]))

    assert resp.status_code == 400
    assert json.loads(resp.body) == {"detail": "a; b", "errors": ["a", "b"]}
