import pytest
from httpx import AsyncClient

@pytest.mark.asyncio
async def test_get_own_profile_with_counts(test_client: AsyncClient, alice, bob):
    await test_client.post("/api/v1/posts", json={"content": "first"}, headers=alice)
    await test_client.post("/api/v1/follows/alice", headers=bob)

    response = await test_client.get("/api/v1/users/profile", headers=alice)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "alice"
    assert data["posts_count"] == 1
    assert data["followers_count"] == 1
    assert data["following_count"] == 0
    assert data["is_following"] is False

@pytest.mark.asyncio
async def test_other_profile_reports_follow_status(test_client: AsyncClient, alice, bob):
    await test_client.post("/api/v1/follows/alice", headers=bob)

    response = await test_client.get("/api/v1/users/profile/alice", headers=bob)

    assert response.status_code == 200
    assert response.json()["is_following"] is True

@pytest.mark.asyncio
async def test_unknown_profile_not_found(test_client: AsyncClient, alice):
    response = await test_client.get("/api/v1/users/profile/nobody", headers=alice)
    assert response.status_code == 404

@pytest.mark.asyncio
async def test_update_profile_trims_and_returns_safe_fields(test_client: AsyncClient, alice):
    response = await test_client.put("/api/v1/users/profile", json={
        "first_name": "  Alicia ",
        "last_name": "Anders",
        "bio": " Mapping every cafe ",
        "profile_image_url": "https://cdn.example.com/a.png"
    }, headers=alice)

    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"id", "email", "first_name", "last_name", "bio", "profile_image_url"}
    assert data["first_name"] == "Alicia"
    assert data["bio"] == "Mapping every cafe"
    assert data["profile_image_url"] == "https://cdn.example.com/a.png"

@pytest.mark.asyncio
async def test_update_profile_empty_strings_clear(test_client: AsyncClient, alice):
    await test_client.put("/api/v1/users/profile", json={
        "first_name": "Alice",
        "last_name": "Anders",
        "bio": "temporary",
        "profile_image_url": "https://cdn.example.com/a.png"
    }, headers=alice)

    response = await test_client.put("/api/v1/users/profile", json={
        "first_name": "Alice",
        "last_name": "Anders",
        "bio": "",
        "profile_image_url": ""
    }, headers=alice)

    assert response.status_code == 200
    assert response.json()["bio"] is None
    assert response.json()["profile_image_url"] is None

@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    {"first_name": "   ", "last_name": "Anders"},
    {"first_name": "A" * 51, "last_name": "Anders"},
    {"first_name": "Alice"},
    {"first_name": "Alice", "last_name": "Anders", "bio": "x" * 501},
    {"first_name": "Alice", "last_name": "Anders", "profile_image_url": "not a url"},
])
async def test_update_profile_rejects_invalid_input(test_client: AsyncClient, alice, payload):
    response = await test_client.put("/api/v1/users/profile", json=payload, headers=alice)

    assert response.status_code == 400
    assert isinstance(response.json()["detail"], list)

@pytest.mark.asyncio
async def test_patch_bio(test_client: AsyncClient, alice):
    response = await test_client.patch("/api/v1/users/bio", json={"bio": "Weekend cyclist"}, headers=alice)

    assert response.status_code == 200
    assert response.json()["bio"] == "Weekend cyclist"
