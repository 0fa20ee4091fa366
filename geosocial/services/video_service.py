from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, desc
import logging

from geosocial.models.video import Video
from geosocial.schemas.like_schema import TargetType
from geosocial.schemas.video_schema import VideoCreate, VideoWithDetails
from geosocial.services.media import MediaDetailsBuilder, delete_engagement

logger = logging.getLogger(__name__)

class VideoService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.details = MediaDetailsBuilder(db, TargetType.VIDEO)

    async def create_video(self, user_id: str, video_data: VideoCreate) -> Video:
        """Create a new video"""
        video = Video(
            user_id=user_id,
            video_url=video_data.video_url,
            thumbnail_url=video_data.thumbnail_url,
            caption=video_data.caption,
            location_id=video_data.location_id,
        )

        self.db.add(video)
        await self.db.commit()
        await self.db.refresh(video)

        logger.info(f"Created video {video.id} for user {user_id}")
        return video

    async def get_video(self, video_id: str) -> Optional[Video]:
        stmt = select(Video).where(Video.id == video_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_user_videos(self, user_id: str) -> List[Video]:
        stmt = select(Video).where(
            Video.user_id == user_id
        ).order_by(
            desc(Video.created_at), desc(Video.id)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_feed_videos(self, viewer_id: str, limit: int = 20) -> List[VideoWithDetails]:
        """Most recent videos across all users, enriched for the viewer"""
        stmt = self.details.base_query().limit(limit)
        result = await self.db.execute(stmt)
        return await self.details.build(result.all(), viewer_id=viewer_id)

    async def get_video_with_details(
        self,
        video_id: str,
        viewer_id: Optional[str] = None
    ) -> Optional[VideoWithDetails]:
        stmt = self.details.base_query().where(Video.id == video_id)
        result = await self.db.execute(stmt)
        row = result.first()

        if not row:
            return None

        items = await self.details.build([row], viewer_id=viewer_id)
        return items[0] if items else None

    async def get_all_videos(self) -> List[VideoWithDetails]:
        result = await self.db.execute(self.details.base_query())
        return await self.details.build(result.all())

    async def delete_video(self, video_id: str, user_id: str) -> bool:
        return await self._delete(video_id, user_id)

    async def delete_video_admin(self, video_id: str) -> bool:
        return await self._delete(video_id)

    async def _delete(self, video_id: str, owner_id: Optional[str] = None) -> bool:
        stmt = select(Video.id).where(Video.id == video_id)
        if owner_id is not None:
            stmt = stmt.where(Video.user_id == owner_id)

        result = await self.db.execute(stmt)
        if result.scalar_one_or_none() is None:
            return False

        await delete_engagement(self.db, TargetType.VIDEO, video_id)
        await self.db.execute(delete(Video).where(Video.id == video_id))
        await self.db.commit()

        logger.info(f"Deleted video {video_id}")
        return True
