from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, desc
import logging

from geosocial.models.post import Post
from geosocial.schemas.like_schema import TargetType
from geosocial.schemas.post_schema import PostCreate, PostWithDetails
from geosocial.services.media import MediaDetailsBuilder, delete_engagement

logger = logging.getLogger(__name__)

class PostService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.details = MediaDetailsBuilder(db, TargetType.POST)

    async def create_post(self, user_id: str, post_data: PostCreate) -> Post:
        """Create a new post"""
        post = Post(
            user_id=user_id,
            content=post_data.content,
            image_url=post_data.image_url,
            location_id=post_data.location_id,
        )

        self.db.add(post)
        await self.db.commit()
        await self.db.refresh(post)

        logger.info(f"Created post {post.id} for user {user_id}")
        return post

    async def get_post(self, post_id: str) -> Optional[Post]:
        """Get a post by ID"""
        stmt = select(Post).where(Post.id == post_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_user_posts(self, user_id: str) -> List[Post]:
        """Get posts by a specific user, newest first"""
        stmt = select(Post).where(
            Post.user_id == user_id
        ).order_by(
            desc(Post.created_at), desc(Post.id)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_feed_posts(self, viewer_id: str, limit: int = 20) -> List[PostWithDetails]:
        """Most recent posts across all users, enriched for the viewer"""
        stmt = self.details.base_query().limit(limit)
        result = await self.db.execute(stmt)
        return await self.details.build(result.all(), viewer_id=viewer_id)

    async def get_post_with_details(
        self,
        post_id: str,
        viewer_id: Optional[str] = None
    ) -> Optional[PostWithDetails]:
        """Get a single post with owner, location, counts and viewer flags"""
        stmt = self.details.base_query().where(Post.id == post_id)
        result = await self.db.execute(stmt)
        row = result.first()

        if not row:
            return None

        items = await self.details.build([row], viewer_id=viewer_id)
        return items[0] if items else None

    async def get_all_posts(self) -> List[PostWithDetails]:
        """Every post, for moderation"""
        result = await self.db.execute(self.details.base_query())
        return await self.details.build(result.all())

    async def delete_post(self, post_id: str, user_id: str) -> bool:
        """Delete a post owned by user_id"""
        return await self._delete(post_id, user_id)

    async def delete_post_admin(self, post_id: str) -> bool:
        """Delete any post regardless of owner"""
        return await self._delete(post_id)

    async def _delete(self, post_id: str, owner_id: Optional[str] = None) -> bool:
        stmt = select(Post.id).where(Post.id == post_id)
        if owner_id is not None:
            stmt = stmt.where(Post.user_id == owner_id)

        result = await self.db.execute(stmt)
        if result.scalar_one_or_none() is None:
            return False

        await delete_engagement(self.db, TargetType.POST, post_id)
        await self.db.execute(delete(Post).where(Post.id == post_id))
        await self.db.commit()

        logger.info(f"Deleted post {post_id}")
        return True
