import pytest
from httpx import AsyncClient

@pytest.mark.asyncio
async def test_follow_user(test_client: AsyncClient, alice, bob):
    response = await test_client.post("/api/v1/follows/alice", headers=bob)

    assert response.status_code == 200
    data = response.json()
    assert data["follower_id"] == "bob"
    assert data["following_id"] == "alice"

@pytest.mark.asyncio
async def test_follow_twice_returns_existing(test_client: AsyncClient, alice, bob):
    first = await test_client.post("/api/v1/follows/alice", headers=bob)
    second = await test_client.post("/api/v1/follows/alice", headers=bob)

    assert second.status_code == 200
    assert first.json()["id"] == second.json()["id"]

    profile = (await test_client.get("/api/v1/users/profile/alice", headers=bob)).json()
    assert profile["followers_count"] == 1

@pytest.mark.asyncio
async def test_cannot_follow_self(test_client: AsyncClient, alice):
    response = await test_client.post("/api/v1/follows/alice", headers=alice)

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot follow yourself"

@pytest.mark.asyncio
async def test_follow_unknown_user(test_client: AsyncClient, bob):
    response = await test_client.post("/api/v1/follows/ghost", headers=bob)
    assert response.status_code == 404

@pytest.mark.asyncio
async def test_unfollow(test_client: AsyncClient, alice, bob):
    await test_client.post("/api/v1/follows/alice", headers=bob)

    response = await test_client.delete("/api/v1/follows/alice", headers=bob)
    assert response.status_code == 200

    again = await test_client.delete("/api/v1/follows/alice", headers=bob)
    assert again.status_code == 404
    assert again.json()["detail"] == "Follow relationship not found"
