from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional
from datetime import datetime

from geosocial.schemas.user_schema import UserResponse

class CommentCreate(BaseModel):
    post_id: Optional[str] = None
    video_id: Optional[str] = None
    text: str = Field(..., min_length=1, max_length=2000)

    @model_validator(mode="after")
    def check_single_target(self):
        if bool(self.post_id) == bool(self.video_id):
            raise ValueError("Exactly one of post_id or video_id must be set")
        return self

class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    post_id: Optional[str] = None
    video_id: Optional[str] = None
    text: str
    created_at: datetime

class CommentWithUser(CommentResponse):
    user: UserResponse
