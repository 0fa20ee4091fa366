from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, update, desc, func
import logging

from geosocial.models.location import Location
from geosocial.models.user import User
from geosocial.models.post import Post
from geosocial.models.video import Video
from geosocial.schemas.location_schema import LocationCreate, LocationResponse, LocationWithDetails
from geosocial.schemas.user_schema import UserResponse

logger = logging.getLogger(__name__)

class LocationService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_location(self, user_id: str, location_data: LocationCreate) -> Location:
        """Create a new location pin"""
        location = Location(
            user_id=user_id,
            latitude=location_data.latitude,
            longitude=location_data.longitude,
            label=location_data.label,
            image_url=location_data.image_url,
        )

        self.db.add(location)
        await self.db.commit()
        await self.db.refresh(location)

        logger.info(f"Created location {location.id} for user {user_id}")
        return location

    async def get_location(self, location_id: str) -> Optional[Location]:
        stmt = select(Location).where(Location.id == location_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_user_locations(self, user_id: str) -> List[Location]:
        stmt = select(Location).where(
            Location.user_id == user_id
        ).order_by(
            desc(Location.created_at), desc(Location.id)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_all_locations(self) -> List[LocationWithDetails]:
        """All locations with their owner and number of tagged posts"""
        stmt = select(Location, User).outerjoin(
            User, Location.user_id == User.id
        ).order_by(
            desc(Location.created_at), desc(Location.id)
        )
        result = await self.db.execute(stmt)
        rows = result.all()

        counts_stmt = select(
            Post.location_id, func.count()
        ).where(
            Post.location_id.is_not(None)
        ).group_by(Post.location_id)
        counts_result = await self.db.execute(counts_stmt)
        posts_counts = {location_id: count for location_id, count in counts_result.all()}

        locations = []
        for location, user in rows:
            if user is None:
                logger.warning(f"Skipping location {location.id}: owner {location.user_id} not found")
                continue

            locations.append(LocationWithDetails(
                **LocationResponse.model_validate(location).model_dump(),
                user=UserResponse.model_validate(user),
                posts_count=posts_counts.get(location.id, 0),
            ))

        return locations

    async def delete_location(self, location_id: str, user_id: str) -> bool:
        return await self._delete(location_id, user_id)

    async def delete_location_admin(self, location_id: str) -> bool:
        return await self._delete(location_id)

    async def _delete(self, location_id: str, owner_id: Optional[str] = None) -> bool:
        stmt = select(Location.id).where(Location.id == location_id)
        if owner_id is not None:
            stmt = stmt.where(Location.user_id == owner_id)

        result = await self.db.execute(stmt)
        if result.scalar_one_or_none() is None:
            return False

        # Tagged media outlive the pin
        for model in (Post, Video):
            await self.db.execute(
                update(model).where(model.location_id == location_id).values(location_id=None)
            )
        await self.db.execute(delete(Location).where(Location.id == location_id))
        await self.db.commit()

        logger.info(f"Deleted location {location_id}")
        return True
