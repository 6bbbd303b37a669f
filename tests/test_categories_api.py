"""Category API tests."""

import pytest


@pytest.mark.asyncio
async def test_create_category(client, make_user):
    user = await make_user()
    r = await client.post("/api/categories", json={"name": "Python"}, headers=user["headers"])
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["data"]["name"] == "Python"
    assert len(body["data"]["id"]) == 24
    assert "createdAt" in body["data"]


@pytest.mark.asyncio
async def test_duplicate_category_name(client, make_user, make_category):
    user = await make_user()
    await make_category(user["headers"], "Python")

    r = await client.post("/api/categories", json={"name": "Python"}, headers=user["headers"])
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Category already exists"}


@pytest.mark.asyncio
async def test_duplicate_check_is_case_sensitive(client, make_user, make_category):
    user = await make_user()
    await make_category(user["headers"], "Python")

    r = await client.post("/api/categories", json={"name": "python"}, headers=user["headers"])
    assert r.status_code == 201


@pytest.mark.asyncio
async def test_name_is_trimmed_before_uniqueness_check(client, make_user, make_category):
    user = await make_user()
    await make_category(user["headers"], "Python")

    r = await client.post("/api/categories", json={"name": "  Python "}, headers=user["headers"])
    assert r.status_code == 400
    assert r.json()["error"] == "Category already exists"


@pytest.mark.asyncio
async def test_category_name_required(client, make_user):
    user = await make_user()
    r = await client.post("/api/categories", json={}, headers=user["headers"])
    assert r.status_code == 400
    assert r.json()["errors"] == [
        {"field": "name", "msg": "Category name is required", "location": "body"}
    ]


@pytest.mark.asyncio
async def test_list_categories_alphabetical(client, make_user, make_category):
    user = await make_user()
    for name in ["Rust", "Go", "Python", "Elixir"]:
        await make_category(user["headers"], name)

    r = await client.get("/api/categories")
    assert r.status_code == 200
    assert [c["name"] for c in r.json()["data"]] == ["Elixir", "Go", "Python", "Rust"]


@pytest.mark.asyncio
async def test_list_categories_is_public_and_empty_by_default(client):
    r = await client.get("/api/categories")
    assert r.status_code == 200
    assert r.json() == {"success": True, "data": []}
