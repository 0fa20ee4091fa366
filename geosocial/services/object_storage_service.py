"""
Object storage for uploaded media

Objects live on local disk under two areas:
    uploads/  private entities, served through /objects/uploads/<id> with an ACL check
    public/   public assets, served through /public-objects/<id> to anyone
Each object has a JSON sidecar holding its content type and access policy.
"""
import uuid
import logging
from pathlib import Path
from typing import AsyncIterator, Optional
from urllib.parse import urlparse

import aiofiles

from geosocial.config import settings
from geosocial.schemas.object_schema import ObjectAclPolicy, ObjectMetadata, ObjectPermission

logger = logging.getLogger(__name__)

PRIVATE_AREA = "uploads"
PUBLIC_AREA = "public"

class ObjectNotFoundError(Exception):
    """Raised when an object path does not resolve to a stored object"""

class ObjectTooLargeError(Exception):
    """Raised when an upload exceeds the configured size limit"""

class ObjectAccessDeniedError(Exception):
    """Raised when writing to or changing the policy of an object owned by someone else"""

class ObjectStorageService:
    def __init__(
        self,
        root_dir: str,
        base_url: str,
        api_prefix: str = "",
        max_upload_size: int = 10 * 1024 * 1024,
    ):
        self.root_dir = Path(root_dir)
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix.rstrip("/")
        self.max_upload_size = max_upload_size

    def get_object_entity_upload_url(self) -> str:
        """URL the client PUTs a private object to"""
        return f"{self.base_url}{self.api_prefix}/objects/{PRIVATE_AREA}/{uuid.uuid4()}"

    def get_public_object_upload_url(self) -> str:
        """URL the client PUTs a public asset to"""
        return f"{self.base_url}{self.api_prefix}/objects/{PUBLIC_AREA}/{uuid.uuid4()}"

    async def store_object(
        self,
        area: str,
        object_id: str,
        content: bytes,
        content_type: Optional[str] = None,
        owner: Optional[str] = None,
    ) -> str:
        """Write an uploaded object and return its normalized path.

        Replacing an existing object requires write access to it.
        """
        if len(content) > self.max_upload_size:
            raise ObjectTooLargeError(f"Object exceeds {self.max_upload_size} bytes")

        object_file = self._resolve(area, object_id)
        if object_file.exists() and not await self.can_access_object_entity(
            object_file, owner, ObjectPermission.WRITE
        ):
            raise ObjectAccessDeniedError(self._object_path(area, object_id))

        object_file.parent.mkdir(parents=True, exist_ok=True)

        async with aiofiles.open(object_file, "wb") as out_file:
            await out_file.write(content)

        # The uploader owns the object; private uploads are readable by the owner only
        acl = None
        if owner:
            acl = ObjectAclPolicy(owner=owner, visibility="private" if area == PRIVATE_AREA else "public")
        await self._write_metadata(object_file, ObjectMetadata(
            content_type=content_type or "application/octet-stream",
            acl=acl,
        ))

        logger.info(f"Stored object {area}/{object_id} ({len(content)} bytes)")
        return self._object_path(area, object_id)

    async def read_upload(self, chunks: AsyncIterator[bytes], declared_size: Optional[int] = None) -> bytes:
        """Collect an upload body, giving up as soon as it passes the size limit"""
        if declared_size is not None and declared_size > self.max_upload_size:
            raise ObjectTooLargeError(f"Object exceeds {self.max_upload_size} bytes")

        content = bytearray()
        async for chunk in chunks:
            content.extend(chunk)
            if len(content) > self.max_upload_size:
                raise ObjectTooLargeError(f"Object exceeds {self.max_upload_size} bytes")
        return bytes(content)

    def get_object_entity_file(self, object_path: str) -> Path:
        """Resolve /objects/uploads/<id> to a stored private object"""
        prefix = f"/objects/{PRIVATE_AREA}/"
        if not object_path.startswith(prefix):
            raise ObjectNotFoundError(object_path)
        return self._existing(PRIVATE_AREA, object_path[len(prefix):])

    def get_public_object_file(self, object_path: str) -> Path:
        """Resolve /public-objects/<path> to a stored public asset"""
        prefix = "/public-objects/"
        if object_path.startswith(prefix):
            object_path = object_path[len(prefix):]
        return self._existing(PUBLIC_AREA, object_path)

    async def get_object_metadata(self, object_file: Path) -> ObjectMetadata:
        sidecar = self._sidecar(object_file)
        if not sidecar.exists():
            return ObjectMetadata()

        async with aiofiles.open(sidecar, "r") as in_file:
            return ObjectMetadata.model_validate_json(await in_file.read())

    async def can_access_object_entity(
        self,
        object_file: Path,
        user_id: Optional[str],
        requested_permission: ObjectPermission = ObjectPermission.READ,
    ) -> bool:
        """Public objects are readable by anyone; owners may read and write"""
        acl = (await self.get_object_metadata(object_file)).acl
        if acl is None:
            return False

        if acl.visibility == "public" and requested_permission == ObjectPermission.READ:
            return True

        return user_id is not None and acl.owner == user_id

    def normalize_object_entity_path(self, raw_path: str) -> str:
        """Map an upload URL to the path objects are served from.

        URLs that do not point at this storage are returned unchanged.
        """
        path = urlparse(raw_path).path if raw_path.startswith(("http://", "https://")) else raw_path

        private_upload = f"{self.api_prefix}/objects/{PRIVATE_AREA}/"
        public_upload = f"{self.api_prefix}/objects/{PUBLIC_AREA}/"

        if path.startswith(private_upload):
            return self._object_path(PRIVATE_AREA, path[len(private_upload):])
        if path.startswith(public_upload):
            return self._object_path(PUBLIC_AREA, path[len(public_upload):])
        if path.startswith(("/objects/", "/public-objects/")):
            return path
        return raw_path

    async def try_set_object_entity_acl_policy(self, raw_path: str, policy: ObjectAclPolicy) -> str:
        """Attach an access policy to an uploaded private object.

        Returns the normalized object path. Public assets and foreign URLs need
        no policy and are returned as normalized.
        """
        normalized = self.normalize_object_entity_path(raw_path)
        if not normalized.startswith(f"/objects/{PRIVATE_AREA}/"):
            return normalized

        object_file = self.get_object_entity_file(normalized)
        metadata = await self.get_object_metadata(object_file)

        if metadata.acl is not None and metadata.acl.owner != policy.owner:
            raise ObjectAccessDeniedError(normalized)

        metadata.acl = policy
        await self._write_metadata(object_file, metadata)

        logger.info(f"Set {policy.visibility} policy on {normalized} for owner {policy.owner}")
        return normalized

    def _object_path(self, area: str, object_id: str) -> str:
        if area == PUBLIC_AREA:
            return f"/public-objects/{object_id}"
        return f"/objects/{area}/{object_id}"

    def _resolve(self, area: str, relative: str) -> Path:
        area_dir = (self.root_dir / area).resolve()
        candidate = (area_dir / relative).resolve()
        if area_dir not in candidate.parents or candidate.name.endswith(".json"):
            raise ObjectNotFoundError(relative)
        return candidate

    def _existing(self, area: str, relative: str) -> Path:
        object_file = self._resolve(area, relative)
        if not object_file.is_file():
            raise ObjectNotFoundError(relative)
        return object_file

    def _sidecar(self, object_file: Path) -> Path:
        return object_file.with_name(object_file.name + ".json")

    async def _write_metadata(self, object_file: Path, metadata: ObjectMetadata) -> None:
        async with aiofiles.open(self._sidecar(object_file), "w") as out_file:
            await out_file.write(metadata.model_dump_json())

_object_storage: Optional[ObjectStorageService] = None

def get_object_storage() -> ObjectStorageService:
    global _object_storage
    if _object_storage is None:
        _object_storage = ObjectStorageService(
            root_dir=settings.OBJECT_STORAGE_DIR,
            base_url=settings.PUBLIC_BASE_URL,
            api_prefix=settings.API_V1_PREFIX,
            max_upload_size=settings.MAX_UPLOAD_SIZE,
        )
    return _object_storage
