from sqlalchemy import Column, String, Float, ForeignKey, Index
from geosocial.db.base import BaseModel

class Location(BaseModel):
    __tablename__ = "locations"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    label = Column(String(200), nullable=False)
    image_url = Column(String(1024))

    __table_args__ = (
        Index('ix_locations_user_id', 'user_id'),
        Index('ix_locations_created_at', 'created_at'),
    )
