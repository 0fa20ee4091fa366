from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from geosocial.schemas.like_schema import LikeResponse, TargetType
from geosocial.services.like_service import LikeService
from geosocial.services.media import media_exists
from geosocial.services.auth_service import get_current_user
from geosocial.db.session import get_db
from geosocial.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/{target_type}/{target_id}", response_model=LikeResponse)
async def like_target(
    target_type: TargetType,
    target_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Like a post or video; repeat likes return the existing like"""
    try:
        if not await media_exists(db, target_type, target_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{target_type.value.capitalize()} not found"
            )

        like_service = LikeService(db)
        return await like_service.like(current_user.id, target_type, target_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Like error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to like"
        )

@router.delete("/{target_type}/{target_id}")
async def unlike_target(
    target_type: TargetType,
    target_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Remove a like; succeeds whether or not one existed"""
    try:
        like_service = LikeService(db)
        await like_service.unlike(current_user.id, target_type, target_id)
        return {"success": True}
    except Exception as e:
        logger.error(f"Unlike error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to unlike"
        )
