"""API tests for registration, login and the current-user endpoint."""

from httpx import AsyncClient

from listings.infrastructure.security import create_access_token


async def test_register_returns_user_and_token(client: AsyncClient, cache) -> None:
    response = await client.post(
        "/api/auth/register",
        json={"email": "Alice@Example.com", "password": "secret123", "name": "Alice"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    user = body["data"]["user"]
    assert user["email"] == "alice@example.com"
    assert user["name"] == "Alice"
    assert "password" not in user and "hashedPassword" not in user
    assert body["data"]["token"]
    assert cache.keys("user:") == [f"user:{user['id']}"]
    assert cache.ttls[f"user:{user['id']}"] == 3600


async def test_register_duplicate_email(client: AsyncClient, register) -> None:
    await register("bob@example.com")
    response = await client.post(
        "/api/auth/register",
        json={"email": "BOB@example.com", "password": "secret123", "name": "Bobby"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Email already registered"


async def test_register_validation_errors(client: AsyncClient) -> None:
    response = await client.post(
        "/api/auth/register",
        json={"email": "not-an-email", "password": "123", "name": "A"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation Error"
    assert len(body["errors"]) == 3


async def test_login_success(client: AsyncClient, register) -> None:
    registered = await register("carol@example.com", password="secret123")
    response = await client.post(
        "/api/auth/login", json={"email": "carol@example.com", "password": "secret123"}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["id"] == registered["user"]["id"]
    assert data["token"]


async def test_login_failures_are_indistinguishable(client: AsyncClient, register) -> None:
    """Unknown email and wrong password give the same 401 message."""
    await register("dave@example.com")
    wrong_password = await client.post(
        "/api/auth/login", json={"email": "dave@example.com", "password": "nope"}
    )
    unknown_email = await client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "nope"}
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json()["message"] == "Invalid credentials"
    assert unknown_email.json()["message"] == "Invalid credentials"


async def test_me_returns_current_user(client: AsyncClient, register) -> None:
    registered = await register("erin@example.com", name="Erin")
    response = await client.get("/api/auth/me", headers=registered["headers"])
    assert response.status_code == 200
    assert response.json()["data"]["user"] == registered["user"]


async def test_me_served_from_cache_after_eviction_repopulates(
    client: AsyncClient, register, cache
) -> None:
    registered = await register("frank@example.com")
    key = f"user:{registered['user']['id']}"
    await cache.delete(key)

    response = await client.get("/api/auth/me", headers=registered["headers"])

    assert response.status_code == 200
    assert key in cache.keys("user:")


async def test_me_without_token(client: AsyncClient) -> None:
    response = await client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["message"] == "No token provided"


async def test_me_with_invalid_token(client: AsyncClient) -> None:
    response = await client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


async def test_me_with_token_for_missing_user(client: AsyncClient) -> None:
    token = create_access_token("nonexistent-user")
    response = await client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "User not found"
