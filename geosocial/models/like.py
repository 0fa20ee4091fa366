from sqlalchemy import Column, String, ForeignKey, CheckConstraint, UniqueConstraint, Index
from geosocial.db.base import BaseModel

# Shared by likes, comments and saves
SINGLE_TARGET_CHECK = (
    '(post_id IS NOT NULL AND video_id IS NULL) OR (post_id IS NULL AND video_id IS NOT NULL)'
)

class Like(BaseModel):
    __tablename__ = "likes"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    post_id = Column(String(36), ForeignKey("posts.id", ondelete="CASCADE"), nullable=True)
    video_id = Column(String(36), ForeignKey("videos.id", ondelete="CASCADE"), nullable=True)

    __table_args__ = (
        # NULL targets never collide, so each pair only constrains its own kind
        UniqueConstraint('user_id', 'post_id', name='uq_likes_user_post'),
        UniqueConstraint('user_id', 'video_id', name='uq_likes_user_video'),
        CheckConstraint(SINGLE_TARGET_CHECK, name='check_like_target'),
        Index('ix_likes_post_id', 'post_id'),
        Index('ix_likes_video_id', 'video_id'),
    )
