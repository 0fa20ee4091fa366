"""
Upload and download of user media.

Clients ask for an upload URL, PUT the raw bytes to it, then register the
resulting path as a location or media image, which marks it public.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import FileResponse
from typing import Optional
import logging

from geosocial.schemas.object_schema import (
    ImageAclRequest,
    ObjectAclPolicy,
    ObjectPathResponse,
    ObjectPermission,
    UploadRequest,
    UploadURLResponse,
)
from geosocial.services.object_storage_service import (
    ObjectAccessDeniedError,
    ObjectNotFoundError,
    ObjectStorageService,
    ObjectTooLargeError,
    PRIVATE_AREA,
    PUBLIC_AREA,
    get_object_storage,
)
from geosocial.services.auth_service import get_current_user
from geosocial.models.user import User

logger = logging.getLogger(__name__)

# Mounted under the API prefix
router = APIRouter()

# Mounted at the root, so stored paths stay stable across API versions
serve_router = APIRouter()

@router.post("/objects/upload", response_model=UploadURLResponse)
async def get_upload_url(
    upload: Optional[UploadRequest] = None,
    current_user: User = Depends(get_current_user),
    storage: ObjectStorageService = Depends(get_object_storage)
):
    """Hand out a one-off URL to PUT an object to"""
    if upload is not None and upload.public:
        return UploadURLResponse(upload_url=storage.get_public_object_upload_url())
    return UploadURLResponse(upload_url=storage.get_object_entity_upload_url())

async def _store(
    request: Request,
    area: str,
    object_id: str,
    current_user: User,
    storage: ObjectStorageService,
) -> ObjectPathResponse:
    try:
        content_length = request.headers.get("content-length")
        content = await storage.read_upload(
            request.stream(),
            declared_size=int(content_length) if content_length and content_length.isdigit() else None,
        )
        object_path = await storage.store_object(
            area,
            object_id,
            content,
            content_type=request.headers.get("content-type"),
            owner=current_user.id,
        )
        return ObjectPathResponse(object_path=object_path)
    except ObjectTooLargeError as e:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=str(e)
        )
    except ObjectAccessDeniedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Object belongs to another user"
        )
    except ObjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid object id"
        )
    except Exception as e:
        logger.error(f"Object upload error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store object"
        )

@router.put("/objects/uploads/{object_id}", response_model=ObjectPathResponse)
async def upload_private_object(
    object_id: str,
    request: Request,
    current_user: User = Depends(get_current_user),
    storage: ObjectStorageService = Depends(get_object_storage)
):
    return await _store(request, PRIVATE_AREA, object_id, current_user, storage)

@router.put("/objects/public/{object_id}", response_model=ObjectPathResponse)
async def upload_public_object(
    object_id: str,
    request: Request,
    current_user: User = Depends(get_current_user),
    storage: ObjectStorageService = Depends(get_object_storage)
):
    return await _store(request, PUBLIC_AREA, object_id, current_user, storage)

async def _publish_image(
    image: ImageAclRequest,
    current_user: User,
    storage: ObjectStorageService,
) -> ObjectPathResponse:
    if not image.image_url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="image_url is required"
        )

    try:
        object_path = await storage.try_set_object_entity_acl_policy(
            image.image_url,
            ObjectAclPolicy(owner=current_user.id, visibility="public"),
        )
        return ObjectPathResponse(object_path=object_path)
    except ObjectAccessDeniedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Object belongs to another user"
        )
    except ObjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Object not found"
        )
    except Exception as e:
        logger.error(f"Error setting image policy: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to set image policy"
        )

@router.put("/location-images", response_model=ObjectPathResponse)
async def set_location_image(
    image: ImageAclRequest,
    current_user: User = Depends(get_current_user),
    storage: ObjectStorageService = Depends(get_object_storage)
):
    """Make an uploaded location photo publicly readable"""
    return await _publish_image(image, current_user, storage)

@router.put("/media-images", response_model=ObjectPathResponse)
async def set_media_image(
    image: ImageAclRequest,
    current_user: User = Depends(get_current_user),
    storage: ObjectStorageService = Depends(get_object_storage)
):
    """Make an uploaded post or video asset publicly readable"""
    return await _publish_image(image, current_user, storage)

@serve_router.get("/objects/{object_path:path}")
async def download_object(
    object_path: str,
    current_user: User = Depends(get_current_user),
    storage: ObjectStorageService = Depends(get_object_storage)
):
    """Serve a private object if its policy lets the caller read it"""
    try:
        object_file = storage.get_object_entity_file(f"/objects/{object_path}")
    except ObjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Object not found"
        )

    if not await storage.can_access_object_entity(object_file, current_user.id, ObjectPermission.READ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized"
        )

    metadata = await storage.get_object_metadata(object_file)
    return FileResponse(object_file, media_type=metadata.content_type)

@serve_router.get("/public-objects/{file_path:path}")
async def download_public_object(
    file_path: str,
    storage: ObjectStorageService = Depends(get_object_storage)
):
    try:
        object_file = storage.get_public_object_file(file_path)
    except ObjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="File not found"
        )

    metadata = await storage.get_object_metadata(object_file)
    return FileResponse(object_file, media_type=metadata.content_type)
