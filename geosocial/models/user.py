from sqlalchemy import Column, String, Text, DateTime, Index
from geosocial.db.base import BaseModel, utcnow

class User(BaseModel):
    __tablename__ = "users"

    # id is the identity provider's subject claim
    email = Column(String(255), index=True, nullable=False)
    username = Column(String(100), nullable=False)
    first_name = Column(String(50))
    last_name = Column(String(50))
    profile_image_url = Column(String(1024))
    bio = Column(Text)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index('ix_users_created_at', 'created_at'),
    )
