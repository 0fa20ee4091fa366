from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from geosocial.schemas.video_schema import VideoCreate, VideoResponse, VideoWithDetails
from geosocial.services.video_service import VideoService
from geosocial.services.location_service import LocationService
from geosocial.services.auth_service import get_current_user
from geosocial.services.admin_policy import AdminPolicy, get_admin_policy
from geosocial.db.session import get_db
from geosocial.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=VideoResponse)
async def create_video(
    video_data: VideoCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a new video"""
    try:
        if video_data.location_id:
            location = await LocationService(db).get_location(video_data.location_id)
            if not location:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Location not found"
                )

        video_service = VideoService(db)
        return await video_service.create_video(current_user.id, video_data)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Create video error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create video"
        )

@router.get("/feed", response_model=List[VideoWithDetails])
async def get_video_feed(
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Most recent videos from everyone"""
    try:
        video_service = VideoService(db)
        return await video_service.get_feed_videos(current_user.id, limit)
    except Exception as e:
        logger.error(f"Error fetching video feed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch video feed"
        )

@router.get("/user", response_model=List[VideoResponse])
@router.get("/user/{user_id}", response_model=List[VideoResponse])
async def get_user_videos(
    user_id: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Videos by a user, defaulting to the caller"""
    try:
        video_service = VideoService(db)
        return await video_service.get_user_videos(user_id or current_user.id)
    except Exception as e:
        logger.error(f"Error fetching user videos: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user videos"
        )

@router.get("/{video_id}", response_model=VideoWithDetails)
async def get_video(
    video_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get a video by ID"""
    try:
        video_service = VideoService(db)
        video = await video_service.get_video_with_details(video_id, current_user.id)

        if not video:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Video not found"
            )

        return video
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Get video error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch video"
        )

@router.delete("/{video_id}")
async def delete_video(
    video_id: str,
    current_user: User = Depends(get_current_user),
    admin_policy: AdminPolicy = Depends(get_admin_policy),
    db: AsyncSession = Depends(get_db)
):
    """Delete a video; admins may delete any video"""
    try:
        video_service = VideoService(db)

        if admin_policy.is_admin(current_user.email):
            deleted = await video_service.delete_video_admin(video_id)
        else:
            deleted = await video_service.delete_video(video_id, current_user.id)

        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Video not found or unauthorized"
            )

        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Delete video error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete video"
        )
