"""
User Service for handling user-related business logic
"""
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from geosocial.db.insert import insert_if_absent
from geosocial.models.user import User
from geosocial.models.post import Post
from geosocial.models.follow import Follow
from geosocial.schemas.user_schema import UserProfile, UserResponse, ProfileUpdate
from geosocial.services.follow_service import FollowService

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: str) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert_user(
        self,
        user_id: str,
        email: str,
        username: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        profile_image_url: Optional[str] = None,
    ) -> User:
        """Create the user on first sign-in, refresh identity fields afterwards.

        The bio is never touched here; it is owned by the profile endpoints.
        """
        stmt = insert_if_absent(
            self.db,
            User,
            {
                "id": user_id,
                "email": email,
                "username": username or email.split("@")[0],
                "first_name": first_name,
                "last_name": last_name,
                "profile_image_url": profile_image_url,
            },
            conflict_columns=("id",),
        )
        result = await self.db.execute(stmt)
        await self.db.commit()

        if result.rowcount:
            logger.info(f"Registered user {user_id}")

        user = await self.get_user(user_id)
        if user is None:
            raise LookupError(f"User {user_id} vanished after sign-in")

        changed = False
        for field, value in (
            ("email", email),
            ("username", username),
            ("first_name", first_name),
            ("last_name", last_name),
            ("profile_image_url", profile_image_url),
        ):
            if value is not None and getattr(user, field) != value:
                setattr(user, field, value)
                changed = True

        if changed:
            await self.db.commit()
            await self.db.refresh(user)

        return user

    async def get_user_profile(
        self,
        user_id: str,
        viewer_id: Optional[str] = None
    ) -> Optional[UserProfile]:
        """Get a user's profile with counts and the viewer's follow status"""
        user = await self.get_user(user_id)
        if not user:
            return None

        is_following = False
        if viewer_id and viewer_id != user_id:
            is_following = await FollowService(self.db).is_following(viewer_id, user_id)

        return UserProfile(
            **UserResponse.model_validate(user).model_dump(),
            posts_count=await self._get_user_post_count(user_id),
            followers_count=await self._get_user_follower_count(user_id),
            following_count=await self._get_user_following_count(user_id),
            is_following=is_following,
        )

    async def update_user_bio(self, user_id: str, bio: Optional[str]) -> Optional[User]:
        user = await self.get_user(user_id)
        if not user:
            return None

        user.bio = bio
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def update_user_profile(self, user_id: str, profile: ProfileUpdate) -> Optional[User]:
        """Apply a profile edit; empty bio or image URL clears the stored value"""
        user = await self.get_user(user_id)
        if not user:
            return None

        user.first_name = profile.first_name
        user.last_name = profile.last_name

        update_data = profile.model_dump(exclude_unset=True)
        if "bio" in update_data:
            user.bio = profile.bio or None
        if "profile_image_url" in update_data:
            user.profile_image_url = str(profile.profile_image_url) if profile.profile_image_url else None

        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"Updated profile for user {user_id}")
        return user

    async def _get_user_post_count(self, user_id: str) -> int:
        stmt = select(func.count()).select_from(Post).where(Post.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def _get_user_follower_count(self, user_id: str) -> int:
        stmt = select(func.count()).select_from(Follow).where(Follow.following_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def _get_user_following_count(self, user_id: str) -> int:
        stmt = select(func.count()).select_from(Follow).where(Follow.follower_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalar() or 0
