from __future__ import annotations

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from todoserver.avatars import avatar_url_for
from todoserver.db.models import User

NEW_USER = {
    "name": "Test User",
    "age": 25,
    "company": "testers",
    "email": "test@example.com",
    "role": "viewer",
}


@pytest.fixture
async def seeded_users(db_session: AsyncSession) -> list[User]:
    users = [
        User(name="Chris", age=25, company="UMM", role="admin", email="chris@this.that", avatar="a"),
        User(name="Pat", age=37, company="IBM", role="editor", email="pat@something.com", avatar="a"),
        User(name="Jamie", age=37, company="Frogs, Inc.", role="viewer", email="jamie@frogs.com", avatar="a"),
    ]
    db_session.add_all(users)
    await db_session.commit()
    return users


@pytest.mark.asyncio
async def test_list_users_sorted_by_name(client: AsyncClient, seeded_users: list[User]) -> None:
    resp = await client.get("/api/users")

    assert resp.status_code == 200
    users = resp.json()
    assert [u["name"] for u in users] == ["Chris", "Jamie", "Pat"]
    assert set(users[0]) == {"_id", "name", "age", "company", "role", "email", "avatar"}


@pytest.mark.asyncio
async def test_list_users_by_age(client: AsyncClient, seeded_users: list[User]) -> None:
    resp = await client.get("/api/users", params={"age": "37"})

    assert resp.status_code == 200
    assert sorted(u["name"] for u in resp.json()) == ["Jamie", "Pat"]


@pytest.mark.asyncio
async def test_list_users_with_non_numeric_age(client: AsyncClient) -> None:
    resp = await client.get("/api/users", params={"age": "abc"})

    assert resp.status_code == 400
    assert "age" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_list_users_by_company_ignores_case(
    client: AsyncClient, seeded_users: list[User]
) -> None:
    resp = await client.get("/api/users", params={"company": "frogs"})

    assert resp.status_code == 200
    assert [u["name"] for u in resp.json()] == ["Jamie"]


@pytest.mark.asyncio
async def test_list_users_by_role_and_age(client: AsyncClient, seeded_users: list[User]) -> None:
    resp = await client.get("/api/users", params={"role": "viewer", "age": "37"})

    assert resp.status_code == 200
    assert [u["name"] for u in resp.json()] == ["Jamie"]


@pytest.mark.asyncio
async def test_list_users_sorted_by_age_desc(
    client: AsyncClient, seeded_users: list[User]
) -> None:
    resp = await client.get("/api/users", params={"sortby": "age", "sortorder": "desc"})

    assert resp.status_code == 200
    assert [u["age"] for u in resp.json()] == [37, 37, 25]


@pytest.mark.asyncio
async def test_add_user_then_fetch(client: AsyncClient) -> None:
    resp = await client.post("/api/users", json=NEW_USER)

    assert resp.status_code == 200
    new_id = resp.json()["id"]

    fetched = await client.get(f"/api/users/{new_id}")
    assert fetched.status_code == 200
    body = fetched.json()
    assert body.pop("_id") == new_id
    assert body.pop("avatar") == avatar_url_for(NEW_USER["email"])
    assert body == NEW_USER


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("override", "message"),
    [
        ({"age": 0}, "User's age must be greater than zero"),
        ({"role": "boss"}, "User must have a legal role"),
        ({"email": "test.example.com"}, "User must have a legal email"),
        ({"name": ""}, "User must have a non-empty name"),
        ({"company": ""}, "User must have a non-empty company"),
    ],
)
async def test_add_invalid_user_is_rejected(
    client: AsyncClient, override: dict[str, object], message: str
) -> None:
    resp = await client.post("/api/users", json={**NEW_USER, **override})

    assert resp.status_code == 400
    assert resp.json()["errors"] == [message]
    assert resp.json()["detail"] == message


@pytest.mark.asyncio
async def test_add_user_rejects_non_object_body(client: AsyncClient) -> None:
    resp = await client.post("/api/users", json=["Test User", 25])

    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_get_user_errors(client: AsyncClient) -> None:
    assert (await client.get("/api/users/not-an-id")).status_code == 400
    assert (await client.get(f"/api/users/{uuid.uuid4()}")).status_code == 404


@pytest.mark.asyncio
async def test_delete_user(client: AsyncClient, seeded_users: list[User]) -> None:
    target = seeded_users[2]

    resp = await client.delete(f"/api/users/{target.id}")
    assert resp.status_code == 204

    gone = await client.get(f"/api/users/{target.id}")
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_add_user_with_oversized_age_is_rejected(client: AsyncClient) -> None:
    resp = await client.post("/api/users", json={**NEW_USER, "age": 10**20})

    assert resp.status_code == 400
    assert resp.json()["errors"] == ["User's age must be greater than zero"]

    listing = await client.get("/api/users")
    assert listing.json() == []


@pytest.mark.asyncio
async def test_list_users_with_oversized_age_is_bad_request(client: AsyncClient) -> None:
    resp = await client.get("/api/users", params={"age": "99999999999999999999"})

    assert resp.status_code == 400
    assert "age" in resp.json()["detail"]
