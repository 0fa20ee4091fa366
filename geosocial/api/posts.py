from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from geosocial.schemas.post_schema import PostCreate, PostResponse, PostWithDetails
from geosocial.services.post_service import PostService
from geosocial.services.location_service import LocationService
from geosocial.services.auth_service import get_current_user
from geosocial.services.admin_policy import AdminPolicy, get_admin_policy
from geosocial.db.session import get_db
from geosocial.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=PostResponse)
async def create_post(
    post_data: PostCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a new post"""
    try:
        if post_data.location_id:
            location = await LocationService(db).get_location(post_data.location_id)
            if not location:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Location not found"
                )

        post_service = PostService(db)
        return await post_service.create_post(current_user.id, post_data)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Create post error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create post"
        )

@router.get("/feed", response_model=List[PostWithDetails])
async def get_feed(
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Most recent posts from everyone"""
    try:
        post_service = PostService(db)
        return await post_service.get_feed_posts(current_user.id, limit)
    except Exception as e:
        logger.error(f"Error fetching feed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch feed"
        )

@router.get("/user", response_model=List[PostResponse])
@router.get("/user/{user_id}", response_model=List[PostResponse])
async def get_user_posts(
    user_id: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Posts by a user, defaulting to the caller"""
    try:
        post_service = PostService(db)
        return await post_service.get_user_posts(user_id or current_user.id)
    except Exception as e:
        logger.error(f"Error fetching user posts: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user posts"
        )

@router.get("/{post_id}", response_model=PostWithDetails)
async def get_post(
    post_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get a post by ID"""
    try:
        post_service = PostService(db)
        post = await post_service.get_post_with_details(post_id, current_user.id)

        if not post:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Post not found"
            )

        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Get post error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch post"
        )

@router.delete("/{post_id}")
async def delete_post(
    post_id: str,
    current_user: User = Depends(get_current_user),
    admin_policy: AdminPolicy = Depends(get_admin_policy),
    db: AsyncSession = Depends(get_db)
):
    """Delete a post; admins may delete any post"""
    try:
        post_service = PostService(db)

        if admin_policy.is_admin(current_user.email):
            deleted = await post_service.delete_post_admin(post_id)
        else:
            deleted = await post_service.delete_post(post_id, current_user.id)

        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Post not found or unauthorized"
            )

        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Delete post error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete post"
        )
