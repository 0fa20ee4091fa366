import pytest
from httpx import AsyncClient

from geosocial.schemas.object_schema import ObjectAclPolicy, ObjectPermission
from geosocial.services.object_storage_service import ObjectNotFoundError, ObjectTooLargeError

async def upload(client: AsyncClient, headers, content: bytes = b"\x89PNG fake", public: bool = False) -> str:
    """Request an upload URL and PUT bytes to it; returns the upload URL"""
    response = await client.post("/api/v1/objects/upload", json={"public": public}, headers=headers)
    assert response.status_code == 200
    upload_url = response.json()["upload_url"]

    stored = await client.put(upload_url, content=content, headers={**headers, "Content-Type": "image/png"})
    assert stored.status_code == 200
    return upload_url

@pytest.mark.asyncio
async def test_upload_url_points_at_private_area(test_client: AsyncClient, alice):
    response = await test_client.post("/api/v1/objects/upload", json={}, headers=alice)

    assert response.status_code == 200
    assert response.json()["upload_url"].startswith("http://test/api/v1/objects/uploads/")

@pytest.mark.asyncio
async def test_upload_url_requires_auth(test_client: AsyncClient):
    response = await test_client.post("/api/v1/objects/upload", json={})
    assert response.status_code == 401

@pytest.mark.asyncio
async def test_private_object_readable_by_owner_only(test_client: AsyncClient, alice, bob):
    upload_url = await upload(test_client, alice)
    object_id = upload_url.rsplit("/", 1)[1]

    own = await test_client.get(f"/objects/uploads/{object_id}", headers=alice)
    assert own.status_code == 200
    assert own.content == b"\x89PNG fake"
    assert own.headers["content-type"] == "image/png"

    assert (await test_client.get(f"/objects/uploads/{object_id}", headers=bob)).status_code == 401
    assert (await test_client.get(f"/objects/uploads/{object_id}")).status_code == 401

@pytest.mark.asyncio
async def test_location_image_becomes_public(test_client: AsyncClient, alice, bob):
    upload_url = await upload(test_client, alice)

    response = await test_client.put("/api/v1/location-images", json={"image_url": upload_url}, headers=alice)

    assert response.status_code == 200
    object_path = response.json()["object_path"]
    assert object_path.startswith("/objects/uploads/")
    assert (await test_client.get(object_path, headers=bob)).status_code == 200
    assert (await test_client.get(object_path)).status_code == 401

@pytest.mark.asyncio
async def test_media_image_of_someone_else_is_forbidden(test_client: AsyncClient, alice, bob):
    upload_url = await upload(test_client, alice)

    response = await test_client.put("/api/v1/media-images", json={"image_url": upload_url}, headers=bob)

    assert response.status_code == 403

@pytest.mark.asyncio
async def test_image_acl_requires_url(test_client: AsyncClient, alice):
    response = await test_client.put("/api/v1/media-images", json={}, headers=alice)
    assert response.status_code == 400

@pytest.mark.asyncio
async def test_image_acl_for_missing_object(test_client: AsyncClient, alice):
    response = await test_client.put(
        "/api/v1/location-images",
        json={"image_url": "http://test/api/v1/objects/uploads/nothing-here"},
        headers=alice
    )
    assert response.status_code == 404

@pytest.mark.asyncio
async def test_foreign_image_url_passes_through(test_client: AsyncClient, alice):
    response = await test_client.put(
        "/api/v1/media-images",
        json={"image_url": "https://images.example.org/cat.jpg"},
        headers=alice
    )

    assert response.status_code == 200
    assert response.json()["object_path"] == "https://images.example.org/cat.jpg"

@pytest.mark.asyncio
async def test_public_upload_served_without_auth(test_client: AsyncClient, alice):
    upload_url = await upload(test_client, alice, content=b"poster", public=True)
    object_id = upload_url.rsplit("/", 1)[1]

    response = await test_client.get(f"/public-objects/{object_id}")

    assert response.status_code == 200
    assert response.content == b"poster"

@pytest.mark.asyncio
async def test_missing_objects_not_found(test_client: AsyncClient, alice):
    assert (await test_client.get("/objects/uploads/missing", headers=alice)).status_code == 404
    assert (await test_client.get("/public-objects/missing")).status_code == 404

@pytest.mark.asyncio
async def test_upload_too_large(test_client: AsyncClient, alice):
    response = await test_client.post("/api/v1/objects/upload", json={}, headers=alice)

    stored = await test_client.put(response.json()["upload_url"], content=b"x" * 2048, headers=alice)

    assert stored.status_code == 413

@pytest.mark.asyncio
async def test_storage_rejects_path_traversal(object_storage):
    with pytest.raises(ObjectNotFoundError):
        object_storage.get_object_entity_file("/objects/uploads/../../etc/passwd")

@pytest.mark.asyncio
async def test_storage_write_permission_is_owner_only(object_storage):
    path = await object_storage.store_object("uploads", "doc", b"data", "text/plain", owner="alice")
    object_file = object_storage.get_object_entity_file(path)

    await object_storage.try_set_object_entity_acl_policy(path, ObjectAclPolicy(owner="alice", visibility="public"))

    assert await object_storage.can_access_object_entity(object_file, "bob", ObjectPermission.READ)
    assert not await object_storage.can_access_object_entity(object_file, "bob", ObjectPermission.WRITE)
    assert await object_storage.can_access_object_entity(object_file, "alice", ObjectPermission.WRITE)

def test_normalize_object_entity_path(object_storage):
    assert object_storage.normalize_object_entity_path(
        "http://test/api/v1/objects/uploads/abc"
    ) == "/objects/uploads/abc"
    assert object_storage.normalize_object_entity_path(
        "http://test/api/v1/objects/public/abc"
    ) == "/public-objects/abc"
    assert object_storage.normalize_object_entity_path("/objects/uploads/abc") == "/objects/uploads/abc"

@pytest.mark.asyncio
async def test_cannot_overwrite_someone_elses_upload(test_client: AsyncClient, alice, bob):
    upload_url = await upload(test_client, alice, content=b"alice original")
    published = await test_client.put("/api/v1/media-images", json={"image_url": upload_url}, headers=alice)
    object_path = published.json()["object_path"]

    response = await test_client.put(upload_url, content=b"bob was here", headers=bob)
    assert response.status_code == 403

    own = await test_client.get(object_path, headers=alice)
    assert own.status_code == 200
    assert own.content == b"alice original"

    # Bob cannot claim the object either
    claim = await test_client.put("/api/v1/media-images", json={"image_url": upload_url}, headers=bob)
    assert claim.status_code == 403

@pytest.mark.asyncio
async def test_cannot_overwrite_someone_elses_public_asset(test_client: AsyncClient, alice, bob):
    upload_url = await upload(test_client, alice, content=b"poster", public=True)
    object_id = upload_url.rsplit("/", 1)[1]

    response = await test_client.put(upload_url, content=b"defaced", headers=bob)

    assert response.status_code == 403
    assert (await test_client.get(f"/public-objects/{object_id}")).content == b"poster"

@pytest.mark.asyncio
async def test_owner_can_replace_own_upload(test_client: AsyncClient, alice):
    upload_url = await upload(test_client, alice, content=b"v1")
    object_id = upload_url.rsplit("/", 1)[1]

    response = await test_client.put(upload_url, content=b"v2", headers=alice)

    assert response.status_code == 200
    assert (await test_client.get(f"/objects/uploads/{object_id}", headers=alice)).content == b"v2"

@pytest.mark.asyncio
async def test_upload_rejected_by_declared_length(test_client: AsyncClient, alice):
    upload_url = (await test_client.post("/api/v1/objects/upload", json={}, headers=alice)).json()["upload_url"]
    object_id = upload_url.rsplit("/", 1)[1]

    response = await test_client.put(
        upload_url,
        content=b"tiny",
        headers={**alice, "Content-Length": str(10 * 1024 * 1024)}
    )

    assert response.status_code == 413
    assert (await test_client.get(f"/objects/uploads/{object_id}", headers=alice)).status_code == 404

@pytest.mark.asyncio
async def test_streamed_upload_cut_off_at_limit(test_client: AsyncClient, alice):
    upload_url = (await test_client.post("/api/v1/objects/upload", json={}, headers=alice)).json()["upload_url"]
    object_id = upload_url.rsplit("/", 1)[1]

    async def body():
        for _ in range(8):
            yield b"x" * 512

    response = await test_client.put(upload_url, content=body(), headers=alice)

    assert response.status_code == 413
    assert (await test_client.get(f"/objects/uploads/{object_id}", headers=alice)).status_code == 404

@pytest.mark.asyncio
async def test_read_upload_stops_after_limit(object_storage):
    pulled = []

    async def chunks():
        for i in range(10):
            pulled.append(i)
            yield b"y" * 400

    with pytest.raises(ObjectTooLargeError):
        await object_storage.read_upload(chunks())

    # 1024-byte limit is passed on the third 400-byte chunk
    assert pulled == [0, 1, 2]

@pytest.mark.asyncio
async def test_read_upload_within_limit(object_storage):
    async def chunks():
        yield b"ab"
        yield b"cd"

    assert await object_storage.read_upload(chunks(), declared_size=4) == b"abcd"
