from pydantic import BaseModel, Field
from typing import Optional, Literal
from enum import Enum

class ObjectPermission(str, Enum):
    READ = "read"
    WRITE = "write"

class ObjectAclPolicy(BaseModel):
    """Access policy stored alongside an uploaded object"""
    owner: str
    visibility: Literal["public", "private"] = "private"

class UploadRequest(BaseModel):
    public: bool = False

class UploadURLResponse(BaseModel):
    upload_url: str

class ImageAclRequest(BaseModel):
    image_url: Optional[str] = Field(None, description="URL returned by the upload step")

class ObjectPathResponse(BaseModel):
    object_path: str

class ObjectMetadata(BaseModel):
    """Sidecar stored next to every object"""
    content_type: str = "application/octet-stream"
    acl: Optional[ObjectAclPolicy] = None
