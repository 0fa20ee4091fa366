from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging

from geosocial.schemas.user_schema import (
    UserProfile,
    UserResponse,
    ProfileUpdate,
    ProfileResponse,
    BioUpdate
)
from geosocial.services.user_service import UserService
from geosocial.services.auth_service import get_current_user
from geosocial.db.session import get_db
from geosocial.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    profile: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update the caller's name, bio and profile image"""
    try:
        user_service = UserService(db)
        user = await user_service.update_user_profile(current_user.id, profile)

        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )

        return ProfileResponse.model_validate(user)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating user profile: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile"
        )

@router.get("/profile", response_model=UserProfile)
@router.get("/profile/{user_id}", response_model=UserProfile)
async def get_profile(
    user_id: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get a user's profile, defaulting to the caller"""
    try:
        user_service = UserService(db)
        profile = await user_service.get_user_profile(user_id or current_user.id, current_user.id)

        if not profile:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )

        return profile
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching user profile: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user profile"
        )

@router.patch("/bio", response_model=UserResponse)
async def update_bio(
    bio_update: BioUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update only the caller's bio"""
    try:
        user_service = UserService(db)
        user = await user_service.update_user_bio(current_user.id, bio_update.bio)

        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )

        return user
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating bio: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update bio"
        )
