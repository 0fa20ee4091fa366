from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from geosocial.schemas.follow_schema import FollowResponse
from geosocial.services.follow_service import FollowService, SelfFollowError
from geosocial.services.user_service import UserService
from geosocial.services.auth_service import get_current_user
from geosocial.db.session import get_db
from geosocial.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/{user_id}", response_model=FollowResponse)
async def follow_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Follow a user"""
    try:
        follow_service = FollowService(db)

        if user_id == current_user.id:
            raise SelfFollowError("Cannot follow yourself")

        # Check if user exists
        if not await UserService(db).get_user(user_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )

        return await follow_service.follow_user(current_user.id, user_id)
    except SelfFollowError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Follow error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to follow user"
        )

@router.delete("/{user_id}")
async def unfollow_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Unfollow a user"""
    try:
        follow_service = FollowService(db)

        if not await follow_service.unfollow_user(current_user.id, user_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Follow relationship not found"
            )

        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unfollow error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to unfollow user"
        )
