from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
import logging

from geosocial.db.insert import insert_if_absent
from geosocial.models.follow import Follow

logger = logging.getLogger(__name__)

class SelfFollowError(ValueError):
    """Raised when a user tries to follow themselves"""

class FollowService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def follow_user(self, follower_id: str, following_id: str) -> Follow:
        """Create a follow relationship, or return the existing one"""
        if follower_id == following_id:
            raise SelfFollowError("Cannot follow yourself")

        stmt = insert_if_absent(
            self.db,
            Follow,
            {"follower_id": follower_id, "following_id": following_id},
            conflict_columns=("follower_id", "following_id"),
        )
        result = await self.db.execute(stmt)
        await self.db.commit()

        if result.rowcount:
            logger.info(f"Created follow: {follower_id} -> {following_id}")

        follow = await self.get_follow_relationship(follower_id, following_id)
        if follow is None:
            raise LookupError(f"Follow {follower_id} -> {following_id} vanished")
        return follow

    async def unfollow_user(self, follower_id: str, following_id: str) -> bool:
        """Delete a follow relationship; returns whether one existed"""
        stmt = delete(Follow).where(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id
        )
        result = await self.db.execute(stmt)
        await self.db.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Deleted follow: {follower_id} -> {following_id}")
        return deleted

    async def is_following(self, follower_id: str, following_id: str) -> bool:
        return await self.get_follow_relationship(follower_id, following_id) is not None

    async def get_follow_relationship(
        self,
        follower_id: str,
        following_id: str
    ) -> Optional[Follow]:
        """Get follow relationship between two users"""
        stmt = select(Follow).where(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
