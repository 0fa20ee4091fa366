from sqlalchemy import Column, String, Text, ForeignKey, Index
from geosocial.db.base import BaseModel

class Post(BaseModel):
    __tablename__ = "posts"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    image_url = Column(String(1024))
    location_id = Column(String(36), ForeignKey("locations.id", ondelete="SET NULL"), nullable=True)

    __table_args__ = (
        Index('ix_posts_user_id', 'user_id'),
        Index('ix_posts_location_id', 'location_id'),
        Index('ix_posts_created_at', 'created_at'),
    )
