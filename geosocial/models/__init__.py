"""
Models package for Geosocial API
"""
from geosocial.db.base import Base, BaseModel
from geosocial.models.user import User
from geosocial.models.location import Location
from geosocial.models.post import Post
from geosocial.models.video import Video
from geosocial.models.like import Like
from geosocial.models.comment import Comment
from geosocial.models.follow import Follow
from geosocial.models.save import Save

__all__ = [
    'Base',
    'BaseModel',
    'User',
    'Location',
    'Post',
    'Video',
    'Like',
    'Comment',
    'Follow',
    'Save',
]
