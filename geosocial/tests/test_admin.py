import pytest
from httpx import AsyncClient

ADMIN_LISTINGS = ["/api/v1/admin/posts", "/api/v1/admin/videos", "/api/v1/admin/locations", "/api/v1/admin/comments"]

@pytest.mark.asyncio
@pytest.mark.parametrize("path", ADMIN_LISTINGS)
async def test_admin_listings_forbidden_for_users(test_client: AsyncClient, alice, path):
    response = await test_client.get(path, headers=alice)

    assert response.status_code == 403
    assert response.json()["detail"] == "Forbidden - Admin access required"

@pytest.mark.asyncio
async def test_admin_lists_everything(test_client: AsyncClient, admin, alice, bob):
    post = (await test_client.post("/api/v1/posts", json={"content": "a"}, headers=alice)).json()
    await test_client.post("/api/v1/posts", json={"content": "b"}, headers=bob)
    await test_client.post("/api/v1/videos", json={"video_url": "/v.mp4"}, headers=bob)
    await test_client.post("/api/v1/locations", json={"latitude": 0, "longitude": 0, "label": "Null Island"}, headers=alice)
    await test_client.post("/api/v1/comments", json={"post_id": post["id"], "text": "c"}, headers=bob)

    posts = (await test_client.get("/api/v1/admin/posts", headers=admin)).json()
    videos = (await test_client.get("/api/v1/admin/videos", headers=admin)).json()
    locations = (await test_client.get("/api/v1/admin/locations", headers=admin)).json()
    comments = (await test_client.get("/api/v1/admin/comments", headers=admin)).json()

    assert [p["content"] for p in posts] == ["b", "a"]
    assert all(p["is_liked"] is False and p["is_saved"] is False for p in posts)
    assert len(videos) == 1
    assert locations[0]["label"] == "Null Island"
    assert comments[0]["user"]["id"] == "bob"

@pytest.mark.asyncio
async def test_admin_deletes_any_content(test_client: AsyncClient, admin, alice, bob):
    post = (await test_client.post("/api/v1/posts", json={"content": "spam"}, headers=alice)).json()
    video = (await test_client.post("/api/v1/videos", json={"video_url": "/v.mp4"}, headers=alice)).json()
    pin = (await test_client.post(
        "/api/v1/locations", json={"latitude": 1, "longitude": 1, "label": "spam"}, headers=alice
    )).json()
    comment = (await test_client.post(
        "/api/v1/comments", json={"video_id": video["id"], "text": "spam"}, headers=bob
    )).json()

    assert (await test_client.delete(f"/api/v1/comments/{comment['id']}", headers=admin)).status_code == 200
    assert (await test_client.delete(f"/api/v1/posts/{post['id']}", headers=admin)).status_code == 200
    assert (await test_client.delete(f"/api/v1/videos/{video['id']}", headers=admin)).status_code == 200
    assert (await test_client.delete(f"/api/v1/locations/{pin['id']}", headers=admin)).status_code == 200

    assert (await test_client.get("/api/v1/admin/posts", headers=admin)).json() == []
    assert (await test_client.get("/api/v1/admin/comments", headers=admin)).json() == []

@pytest.mark.asyncio
async def test_admin_delete_missing_post(test_client: AsyncClient, admin):
    response = await test_client.delete("/api/v1/posts/missing", headers=admin)
    assert response.status_code == 404
