"""
Shared post/video plumbing: target columns, batched enrichment and
engagement cleanup.
"""
import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple, Any

from sqlalchemy import select, delete, desc, func
from sqlalchemy.ext.asyncio import AsyncSession

from geosocial.models.user import User
from geosocial.models.post import Post
from geosocial.models.video import Video
from geosocial.models.location import Location
from geosocial.models.like import Like
from geosocial.models.comment import Comment
from geosocial.models.save import Save
from geosocial.schemas.like_schema import TargetType
from geosocial.schemas.user_schema import UserResponse
from geosocial.schemas.location_schema import LocationResponse
from geosocial.schemas.post_schema import PostResponse, PostWithDetails
from geosocial.schemas.video_schema import VideoResponse, VideoWithDetails

logger = logging.getLogger(__name__)

MEDIA_MODELS = {
    TargetType.POST: Post,
    TargetType.VIDEO: Video,
}

TARGET_COLUMN_NAMES = {
    TargetType.POST: "post_id",
    TargetType.VIDEO: "video_id",
}

def target_column(model: Any, target_type: TargetType):
    """Column of a like/comment/save model that points at the given target kind"""
    return getattr(model, TARGET_COLUMN_NAMES[target_type])

async def media_exists(db: AsyncSession, target_type: TargetType, target_id: str) -> bool:
    model = MEDIA_MODELS[target_type]
    stmt = select(model.id).where(model.id == target_id)
    result = await db.execute(stmt)
    return result.scalar_one_or_none() is not None

async def delete_engagement(db: AsyncSession, target_type: TargetType, target_id: str) -> None:
    """Remove likes, comments and saves attached to a post or video"""
    for model in (Like, Comment, Save):
        await db.execute(delete(model).where(target_column(model, target_type) == target_id))

MediaRow = Tuple[Any, Optional[User], Optional[Location]]

class MediaDetailsBuilder:
    """Turns post/video rows into enriched views with a fixed number of queries per page."""

    def __init__(self, db: AsyncSession, target_type: TargetType):
        self.db = db
        self.target_type = target_type
        self.model = MEDIA_MODELS[target_type]
        if target_type == TargetType.POST:
            self.base_schema, self.details_schema = PostResponse, PostWithDetails
        else:
            self.base_schema, self.details_schema = VideoResponse, VideoWithDetails

    def base_query(self):
        """Media joined to owner and tagged location, newest first"""
        model = self.model
        return select(model, User, Location).outerjoin(
            User, model.user_id == User.id
        ).outerjoin(
            Location, model.location_id == Location.id
        ).order_by(
            desc(model.created_at), desc(model.id)
        )

    async def _count_by_target(self, model: Any, ids: Sequence[str]) -> Dict[str, int]:
        column = target_column(model, self.target_type)
        stmt = select(column, func.count()).where(column.in_(ids)).group_by(column)
        result = await self.db.execute(stmt)
        return {target_id: count for target_id, count in result.all()}

    async def _viewer_target_ids(self, model: Any, viewer_id: str, ids: Sequence[str]) -> Set[str]:
        column = target_column(model, self.target_type)
        stmt = select(column).where(model.user_id == viewer_id, column.in_(ids))
        result = await self.db.execute(stmt)
        return set(result.scalars().all())

    async def build(
        self,
        rows: Sequence[MediaRow],
        viewer_id: Optional[str] = None,
        all_saved: bool = False,
    ) -> List[Any]:
        """Enrich rows in their original order.

        Rows whose owner no longer exists are skipped. Without a viewer the
        viewer-relative flags stay False; ``all_saved`` marks every item saved
        (used for a user's saved listing).
        """
        kept = []
        for media, user, location in rows:
            if user is None:
                logger.warning(f"Skipping {self.target_type.value} {media.id}: owner {media.user_id} not found")
                continue
            kept.append((media, user, location))

        if not kept:
            return []

        ids = [media.id for media, _, _ in kept]
        likes_counts = await self._count_by_target(Like, ids)
        comments_counts = await self._count_by_target(Comment, ids)

        liked_ids: Set[str] = set()
        saved_ids: Set[str] = set()
        if viewer_id:
            liked_ids = await self._viewer_target_ids(Like, viewer_id, ids)
            if not all_saved:
                saved_ids = await self._viewer_target_ids(Save, viewer_id, ids)

        items = []
        for media, user, location in kept:
            base = self.base_schema.model_validate(media).model_dump()
            items.append(self.details_schema(
                **base,
                user=UserResponse.model_validate(user),
                location=LocationResponse.model_validate(location) if location else None,
                likes_count=likes_counts.get(media.id, 0),
                comments_count=comments_counts.get(media.id, 0),
                is_liked=media.id in liked_ids,
                is_saved=all_saved or media.id in saved_ids,
            ))
        return items
