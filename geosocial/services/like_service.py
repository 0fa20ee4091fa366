from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
import logging

from geosocial.db.insert import insert_if_absent
from geosocial.models.like import Like
from geosocial.schemas.like_schema import TargetType
from geosocial.services.media import target_column, TARGET_COLUMN_NAMES

logger = logging.getLogger(__name__)

class LikeService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def like(self, user_id: str, target_type: TargetType, target_id: str) -> Like:
        """Like a post or video; liking twice returns the original like"""
        column_name = TARGET_COLUMN_NAMES[target_type]
        stmt = insert_if_absent(
            self.db,
            Like,
            {"user_id": user_id, column_name: target_id},
            conflict_columns=("user_id", column_name),
        )
        result = await self.db.execute(stmt)
        await self.db.commit()

        if result.rowcount:
            logger.info(f"Created like: user={user_id}, {column_name}={target_id}")

        like = await self._get_existing_like(user_id, target_type, target_id)
        if like is None:
            # Removed by a concurrent unlike between insert and read
            raise LookupError(f"Like for {target_type.value} {target_id} vanished")
        return like

    async def unlike(self, user_id: str, target_type: TargetType, target_id: str) -> bool:
        """Remove a like; returns whether one existed"""
        stmt = delete(Like).where(
            Like.user_id == user_id,
            target_column(Like, target_type) == target_id
        )
        result = await self.db.execute(stmt)
        await self.db.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Deleted like: user={user_id}, {target_type.value}={target_id}")
        return deleted

    async def is_liked(self, user_id: str, target_type: TargetType, target_id: str) -> bool:
        return await self._get_existing_like(user_id, target_type, target_id) is not None

    async def _get_existing_like(
        self,
        user_id: str,
        target_type: TargetType,
        target_id: str
    ) -> Optional[Like]:
        stmt = select(Like).where(
            Like.user_id == user_id,
            target_column(Like, target_type) == target_id
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
