from sqlalchemy import Column, String, ForeignKey, CheckConstraint, UniqueConstraint, Index
from geosocial.db.base import BaseModel
from geosocial.models.like import SINGLE_TARGET_CHECK

class Save(BaseModel):
    __tablename__ = "saves"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    post_id = Column(String(36), ForeignKey("posts.id", ondelete="CASCADE"), nullable=True)
    video_id = Column(String(36), ForeignKey("videos.id", ondelete="CASCADE"), nullable=True)

    __table_args__ = (
        UniqueConstraint('user_id', 'post_id', name='uq_saves_user_post'),
        UniqueConstraint('user_id', 'video_id', name='uq_saves_user_video'),
        CheckConstraint(SINGLE_TARGET_CHECK, name='check_save_target'),
        Index('ix_saves_user_created_at', 'user_id', 'created_at'),
    )
