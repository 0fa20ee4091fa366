from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from geosocial.schemas.user_schema import UserResponse
from geosocial.schemas.location_schema import LocationResponse

class PostCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2200)
    image_url: Optional[str] = Field(None, max_length=1024)
    location_id: Optional[str] = None

class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    content: str
    image_url: Optional[str] = None
    location_id: Optional[str] = None
    created_at: datetime

class PostWithDetails(PostResponse):
    user: UserResponse
    location: Optional[LocationResponse] = None
    likes_count: int = 0
    comments_count: int = 0
    is_liked: bool = False
    is_saved: bool = False
