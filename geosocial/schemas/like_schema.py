from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from enum import Enum

class TargetType(str, Enum):
    POST = "post"
    VIDEO = "video"

class LikeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    post_id: Optional[str] = None
    video_id: Optional[str] = None
    created_at: datetime
