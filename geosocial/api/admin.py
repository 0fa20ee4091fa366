"""
Moderation listings. Deletion goes through the regular endpoints, which
let admins remove anything.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from geosocial.schemas.post_schema import PostWithDetails
from geosocial.schemas.video_schema import VideoWithDetails
from geosocial.schemas.location_schema import LocationWithDetails
from geosocial.schemas.comment_schema import CommentWithUser
from geosocial.services.post_service import PostService
from geosocial.services.video_service import VideoService
from geosocial.services.location_service import LocationService
from geosocial.services.comment_service import CommentService
from geosocial.services.admin_policy import require_admin
from geosocial.db.session import get_db
from geosocial.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/posts", response_model=List[PostWithDetails])
async def get_all_posts(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await PostService(db).get_all_posts()
    except Exception as e:
        logger.error(f"Admin posts error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch posts"
        )

@router.get("/videos", response_model=List[VideoWithDetails])
async def get_all_videos(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await VideoService(db).get_all_videos()
    except Exception as e:
        logger.error(f"Admin videos error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch videos"
        )

@router.get("/locations", response_model=List[LocationWithDetails])
async def get_all_locations(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await LocationService(db).get_all_locations()
    except Exception as e:
        logger.error(f"Admin locations error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch locations"
        )

@router.get("/comments", response_model=List[CommentWithUser])
async def get_all_comments(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await CommentService(db).get_all_comments()
    except Exception as e:
        logger.error(f"Admin comments error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch comments"
        )
