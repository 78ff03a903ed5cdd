"""API tests for per-user favorites."""

from httpx import AsyncClient


async def test_add_and_list_favorites(client: AsyncClient, register, create_property) -> None:
    owner = await register("owner@example.com")
    user = await register("user@example.com")
    first = await create_property(owner["headers"], title="First")
    second = await create_property(owner["headers"], title="Second")

    added = await client.post(f"/api/favorites/{first['id']}", headers=user["headers"])
    assert added.status_code == 201
    favorite = added.json()["data"]["favorite"]
    assert favorite["user"] == user["user"]["id"]
    assert favorite["property"] == first["id"]
    await client.post(f"/api/favorites/{second['id']}", headers=user["headers"])

    response = await client.get("/api/favorites", headers=user["headers"])

    assert response.status_code == 200
    favorites = response.json()["data"]["favorites"]
    assert {f["property"]["id"] for f in favorites} == {first["id"], second["id"]}
    embedded = favorites[0]["property"]
    assert "createdBy" not in embedded
    assert embedded["location"]["city"] == "Austin"


async def test_favorites_are_private_per_user(
    client: AsyncClient, register, create_property
) -> None:
    owner = await register("owner@example.com")
    user = await register("user@example.com")
    prop = await create_property(owner["headers"])
    await client.post(f"/api/favorites/{prop['id']}", headers=user["headers"])

    response = await client.get("/api/favorites", headers=owner["headers"])

    assert response.json()["data"]["favorites"] == []


async def test_add_duplicate_favorite(client: AsyncClient, register, create_property) -> None:
    user = await register("user@example.com")
    prop = await create_property(user["headers"])
    await client.post(f"/api/favorites/{prop['id']}", headers=user["headers"])

    response = await client.post(f"/api/favorites/{prop['id']}", headers=user["headers"])

    assert response.status_code == 400
    assert response.json()["message"] == "Property already in favorites"


async def test_add_favorite_for_missing_property(client: AsyncClient, register) -> None:
    user = await register("user@example.com")
    response = await client.post("/api/favorites/nope", headers=user["headers"])
    assert response.status_code == 404
    assert response.json()["message"] == "Property not found"


async def test_remove_favorite(client: AsyncClient, register, create_property, cache) -> None:
    user = await register("user@example.com")
    prop = await create_property(user["headers"])
    await client.post(f"/api/favorites/{prop['id']}", headers=user["headers"])
    await client.get("/api/favorites", headers=user["headers"])
    key = f"favorites:{user['user']['id']}"
    assert key in cache.keys("favorites:")

    response = await client.delete(f"/api/favorites/{prop['id']}", headers=user["headers"])

    assert response.status_code == 200
    assert key not in cache.keys("favorites:")
    listed = await client.get("/api/favorites", headers=user["headers"])
    assert listed.json()["data"]["favorites"] == []


async def test_remove_missing_favorite(client: AsyncClient, register, create_property) -> None:
    user = await register("user@example.com")
    prop = await create_property(user["headers"])
    response = await client.delete(f"/api/favorites/{prop['id']}", headers=user["headers"])
    assert response.status_code == 404
    assert response.json()["message"] == "Favorite not found"


async def test_add_invalidates_cached_list(
    client: AsyncClient, register, create_property
) -> None:
    user = await register("user@example.com")
    prop = await create_property(user["headers"])
    assert (await client.get("/api/favorites", headers=user["headers"])).json()["data"][
        "favorites"
    ] == []

    await client.post(f"/api/favorites/{prop['id']}", headers=user["headers"])

    listed = await client.get("/api/favorites", headers=user["headers"])
    assert len(listed.json()["data"]["favorites"]) == 1


async def test_favorites_require_auth(client: AsyncClient) -> None:
    assert (await client.get("/api/favorites")).status_code == 401
