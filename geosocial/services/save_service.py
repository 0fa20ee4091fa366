from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, desc
import logging

from geosocial.db.insert import insert_if_absent
from geosocial.models.save import Save
from geosocial.models.user import User
from geosocial.models.location import Location
from geosocial.schemas.like_schema import TargetType
from geosocial.schemas.post_schema import PostWithDetails
from geosocial.schemas.video_schema import VideoWithDetails
from geosocial.services.media import MediaDetailsBuilder, target_column, TARGET_COLUMN_NAMES

logger = logging.getLogger(__name__)

class SaveService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, user_id: str, target_type: TargetType, target_id: str) -> Save:
        """Bookmark a post or video; saving twice returns the original save"""
        column_name = TARGET_COLUMN_NAMES[target_type]
        stmt = insert_if_absent(
            self.db,
            Save,
            {"user_id": user_id, column_name: target_id},
            conflict_columns=("user_id", column_name),
        )
        result = await self.db.execute(stmt)
        await self.db.commit()

        if result.rowcount:
            logger.info(f"Created save: user={user_id}, {column_name}={target_id}")

        save = await self._get_existing_save(user_id, target_type, target_id)
        if save is None:
            raise LookupError(f"Save for {target_type.value} {target_id} vanished")
        return save

    async def unsave(self, user_id: str, target_type: TargetType, target_id: str) -> bool:
        stmt = delete(Save).where(
            Save.user_id == user_id,
            target_column(Save, target_type) == target_id
        )
        result = await self.db.execute(stmt)
        await self.db.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Deleted save: user={user_id}, {target_type.value}={target_id}")
        return deleted

    async def is_saved(self, user_id: str, target_type: TargetType, target_id: str) -> bool:
        return await self._get_existing_save(user_id, target_type, target_id) is not None

    async def get_saved_posts(self, user_id: str) -> List[PostWithDetails]:
        """Posts the user saved, most recently saved first"""
        return await self._get_saved(user_id, TargetType.POST)

    async def get_saved_videos(self, user_id: str) -> List[VideoWithDetails]:
        return await self._get_saved(user_id, TargetType.VIDEO)

    async def _get_saved(self, user_id: str, target_type: TargetType) -> list:
        details = MediaDetailsBuilder(self.db, target_type)
        model = details.model

        # Inner join drops saves whose target no longer exists
        stmt = select(model, User, Location).select_from(Save).join(
            model, target_column(Save, target_type) == model.id
        ).outerjoin(
            User, model.user_id == User.id
        ).outerjoin(
            Location, model.location_id == Location.id
        ).where(
            Save.user_id == user_id
        ).order_by(
            desc(Save.created_at), desc(Save.id)
        )
        result = await self.db.execute(stmt)
        return await details.build(result.all(), viewer_id=user_id, all_saved=True)

    async def _get_existing_save(
        self,
        user_id: str,
        target_type: TargetType,
        target_id: str
    ) -> Optional[Save]:
        stmt = select(Save).where(
            Save.user_id == user_id,
            target_column(Save, target_type) == target_id
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
