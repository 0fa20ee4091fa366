from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from geosocial.schemas.user_schema import UserResponse
from geosocial.schemas.location_schema import LocationResponse

class VideoCreate(BaseModel):
    video_url: str = Field(..., min_length=1, max_length=1024)
    thumbnail_url: Optional[str] = Field(None, max_length=1024)
    caption: Optional[str] = Field(None, max_length=2200)
    location_id: Optional[str] = None

class VideoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    video_url: str
    thumbnail_url: Optional[str] = None
    caption: Optional[str] = None
    location_id: Optional[str] = None
    created_at: datetime

class VideoWithDetails(VideoResponse):
    user: UserResponse
    location: Optional[LocationResponse] = None
    likes_count: int = 0
    comments_count: int = 0
    is_liked: bool = False
    is_saved: bool = False
