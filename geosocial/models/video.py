from sqlalchemy import Column, String, Text, ForeignKey, Index
from geosocial.db.base import BaseModel

class Video(BaseModel):
    __tablename__ = "videos"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    video_url = Column(String(1024), nullable=False)
    thumbnail_url = Column(String(1024))
    caption = Column(Text)
    location_id = Column(String(36), ForeignKey("locations.id", ondelete="SET NULL"), nullable=True)

    __table_args__ = (
        Index('ix_videos_user_id', 'user_id'),
        Index('ix_videos_location_id', 'location_id'),
        Index('ix_videos_created_at', 'created_at'),
    )
