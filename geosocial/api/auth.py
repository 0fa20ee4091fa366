from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging

from geosocial.schemas.auth_schema import LogoutResponse
from geosocial.schemas.user_schema import CurrentUserResponse, UserResponse
from geosocial.services.auth_service import AuthService, get_current_user, bearer_scheme
from geosocial.services.admin_policy import AdminPolicy, get_admin_policy
from geosocial.services.redis_service import get_session_store
from geosocial.db.session import get_db
from geosocial.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/user", response_model=CurrentUserResponse)
async def get_auth_user(
    current_user: User = Depends(get_current_user),
    admin_policy: AdminPolicy = Depends(get_admin_policy)
):
    """Current session's user and admin flag"""
    try:
        return CurrentUserResponse(
            **UserResponse.model_validate(current_user).model_dump(),
            is_admin=admin_policy.is_admin(current_user.email)
        )
    except Exception as e:
        logger.error(f"Error fetching user: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user"
        )

@router.post("/logout", response_model=LogoutResponse)
async def logout(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    session_store=Depends(get_session_store)
):
    """Revoke the presented session token"""
    try:
        auth_service = AuthService(db, session_store)
        await auth_service.revoke_token(credentials.credentials)

        logger.info(f"User {current_user.id} logged out")
        return LogoutResponse()
    except Exception as e:
        logger.error(f"Logout error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to log out"
        )
