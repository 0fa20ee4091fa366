from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from geosocial.schemas.user_schema import UserResponse

class LocationCreate(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    label: str = Field(..., min_length=1, max_length=200)
    image_url: Optional[str] = Field(None, max_length=1024)

class LocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    latitude: float
    longitude: float
    label: str
    image_url: Optional[str] = None
    created_at: datetime

class LocationWithDetails(LocationResponse):
    user: UserResponse
    posts_count: int = 0
