from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from geosocial.schemas.comment_schema import CommentCreate, CommentResponse, CommentWithUser
from geosocial.schemas.like_schema import TargetType
from geosocial.services.comment_service import CommentService
from geosocial.services.media import media_exists
from geosocial.services.auth_service import get_current_user
from geosocial.services.admin_policy import AdminPolicy, get_admin_policy
from geosocial.db.session import get_db
from geosocial.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=CommentResponse)
async def create_comment(
    comment_data: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Comment on a post or a video"""
    try:
        if comment_data.post_id:
            target_type, target_id = TargetType.POST, comment_data.post_id
        else:
            target_type, target_id = TargetType.VIDEO, comment_data.video_id

        if not await media_exists(db, target_type, target_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{target_type.value.capitalize()} not found"
            )

        comment_service = CommentService(db)
        return await comment_service.create_comment(current_user.id, comment_data)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Create comment error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create comment"
        )

@router.get("/post/{post_id}", response_model=List[CommentWithUser])
async def get_post_comments(
    post_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Comments on a post, newest first"""
    try:
        comment_service = CommentService(db)
        return await comment_service.get_post_comments(post_id)
    except Exception as e:
        logger.error(f"Error fetching post comments: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch comments"
        )

@router.get("/video/{video_id}", response_model=List[CommentWithUser])
async def get_video_comments(
    video_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Comments on a video, newest first"""
    try:
        comment_service = CommentService(db)
        return await comment_service.get_video_comments(video_id)
    except Exception as e:
        logger.error(f"Error fetching video comments: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch comments"
        )

@router.delete("/{comment_id}")
async def delete_comment(
    comment_id: str,
    current_user: User = Depends(get_current_user),
    admin_policy: AdminPolicy = Depends(get_admin_policy),
    db: AsyncSession = Depends(get_db)
):
    try:
        comment_service = CommentService(db)

        if admin_policy.is_admin(current_user.email):
            deleted = await comment_service.delete_comment_admin(comment_id)
        else:
            deleted = await comment_service.delete_comment(comment_id, current_user.id)

        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Comment not found or unauthorized"
            )

        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Delete comment error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete comment"
        )
