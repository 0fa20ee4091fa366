import pytest
from httpx import AsyncClient

PIN = {"latitude": 48.8584, "longitude": 2.2945, "label": "Eiffel Tower"}

async def create_location(client: AsyncClient, headers, **fields) -> dict:
    response = await client.post("/api/v1/locations", json={**PIN, **fields}, headers=headers)
    assert response.status_code == 200
    return response.json()

@pytest.mark.asyncio
async def test_create_location(test_client: AsyncClient, alice):
    data = await create_location(test_client, alice)

    assert data["user_id"] == "alice"
    assert data["latitude"] == 48.8584
    assert data["label"] == "Eiffel Tower"

@pytest.mark.asyncio
@pytest.mark.parametrize("overrides", [
    {"latitude": 91},
    {"latitude": -90.5},
    {"longitude": 180.1},
    {"label": ""},
])
async def test_create_location_rejects_out_of_range(test_client: AsyncClient, alice, overrides):
    response = await test_client.post("/api/v1/locations", json={**PIN, **overrides}, headers=alice)
    assert response.status_code == 400

@pytest.mark.asyncio
async def test_list_locations_with_post_counts(test_client: AsyncClient, alice, bob):
    tower = await create_location(test_client, alice)
    await create_location(test_client, bob, label="Louvre")
    await test_client.post("/api/v1/posts", json={"content": "view", "location_id": tower["id"]}, headers=bob)
    await test_client.post("/api/v1/posts", json={"content": "again", "location_id": tower["id"]}, headers=alice)

    response = await test_client.get("/api/v1/locations", headers=alice)

    assert response.status_code == 200
    data = {loc["label"]: loc for loc in response.json()}
    assert data["Eiffel Tower"]["posts_count"] == 2
    assert data["Eiffel Tower"]["user"]["id"] == "alice"
    assert data["Louvre"]["posts_count"] == 0

@pytest.mark.asyncio
async def test_user_locations_and_lookup(test_client: AsyncClient, alice, bob):
    pin = await create_location(test_client, alice)

    assert [loc["id"] for loc in (await test_client.get("/api/v1/locations/user", headers=alice)).json()] == [pin["id"]]
    assert (await test_client.get("/api/v1/locations/user/alice", headers=bob)).json()[0]["id"] == pin["id"]
    assert (await test_client.get(f"/api/v1/locations/{pin['id']}", headers=bob)).json()["label"] == "Eiffel Tower"
    assert (await test_client.get("/api/v1/locations/missing", headers=bob)).status_code == 404

@pytest.mark.asyncio
async def test_delete_location_keeps_tagged_media(test_client: AsyncClient, alice):
    pin = await create_location(test_client, alice)
    post = (await test_client.post(
        "/api/v1/posts", json={"content": "tagged", "location_id": pin["id"]}, headers=alice
    )).json()
    video = (await test_client.post(
        "/api/v1/videos", json={"video_url": "/v.mp4", "location_id": pin["id"]}, headers=alice
    )).json()

    response = await test_client.delete(f"/api/v1/locations/{pin['id']}", headers=alice)
    assert response.status_code == 200

    post_detail = (await test_client.get(f"/api/v1/posts/{post['id']}", headers=alice)).json()
    video_detail = (await test_client.get(f"/api/v1/videos/{video['id']}", headers=alice)).json()
    assert post_detail["location_id"] is None
    assert post_detail["location"] is None
    assert video_detail["location_id"] is None

@pytest.mark.asyncio
async def test_delete_location_by_non_owner(test_client: AsyncClient, alice, bob):
    pin = await create_location(test_client, alice)

    response = await test_client.delete(f"/api/v1/locations/{pin['id']}", headers=bob)

    assert response.status_code == 404
