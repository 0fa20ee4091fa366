from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from geosocial.schemas.like_schema import TargetType
from geosocial.schemas.save_schema import SaveResponse
from geosocial.schemas.post_schema import PostWithDetails
from geosocial.schemas.video_schema import VideoWithDetails
from geosocial.services.save_service import SaveService
from geosocial.services.media import media_exists
from geosocial.services.auth_service import get_current_user
from geosocial.db.session import get_db
from geosocial.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/posts", response_model=List[PostWithDetails])
async def get_saved_posts(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Posts the caller has saved, most recently saved first"""
    try:
        save_service = SaveService(db)
        return await save_service.get_saved_posts(current_user.id)
    except Exception as e:
        logger.error(f"Error fetching saved posts: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch saved posts"
        )

@router.get("/videos", response_model=List[VideoWithDetails])
async def get_saved_videos(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Videos the caller has saved, most recently saved first"""
    try:
        save_service = SaveService(db)
        return await save_service.get_saved_videos(current_user.id)
    except Exception as e:
        logger.error(f"Error fetching saved videos: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch saved videos"
        )

@router.post("/{target_type}/{target_id}", response_model=SaveResponse)
async def save_target(
    target_type: TargetType,
    target_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Bookmark a post or video; repeat saves return the existing save"""
    try:
        if not await media_exists(db, target_type, target_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{target_type.value.capitalize()} not found"
            )

        save_service = SaveService(db)
        return await save_service.save(current_user.id, target_type, target_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Save error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save"
        )

@router.delete("/{target_type}/{target_id}")
async def unsave_target(
    target_type: TargetType,
    target_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        save_service = SaveService(db)
        await save_service.unsave(current_user.id, target_type, target_id)
        return {"success": True}
    except Exception as e:
        logger.error(f"Unsave error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to unsave"
        )
