from pydantic import BaseModel, ConfigDict
from datetime import datetime

class FollowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    follower_id: str
    following_id: str
    created_at: datetime
