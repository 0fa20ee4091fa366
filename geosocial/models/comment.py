from sqlalchemy import Column, String, Text, ForeignKey, CheckConstraint, Index
from geosocial.db.base import BaseModel
from geosocial.models.like import SINGLE_TARGET_CHECK

class Comment(BaseModel):
    __tablename__ = "comments"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    post_id = Column(String(36), ForeignKey("posts.id", ondelete="CASCADE"), nullable=True)
    video_id = Column(String(36), ForeignKey("videos.id", ondelete="CASCADE"), nullable=True)
    text = Column(Text, nullable=False)

    __table_args__ = (
        CheckConstraint(SINGLE_TARGET_CHECK, name='check_comment_target'),
        Index('ix_comments_post_id', 'post_id'),
        Index('ix_comments_video_id', 'video_id'),
        Index('ix_comments_created_at', 'created_at'),
    )
