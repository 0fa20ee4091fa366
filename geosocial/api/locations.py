from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from geosocial.schemas.location_schema import LocationCreate, LocationResponse, LocationWithDetails
from geosocial.services.location_service import LocationService
from geosocial.services.auth_service import get_current_user
from geosocial.services.admin_policy import AdminPolicy, get_admin_policy
from geosocial.db.session import get_db
from geosocial.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=LocationResponse)
async def create_location(
    location_data: LocationCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Drop a location pin"""
    try:
        location_service = LocationService(db)
        return await location_service.create_location(current_user.id, location_data)
    except Exception as e:
        logger.error(f"Create location error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create location"
        )

@router.get("", response_model=List[LocationWithDetails])
async def get_locations(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Every pin on the map"""
    try:
        location_service = LocationService(db)
        return await location_service.get_all_locations()
    except Exception as e:
        logger.error(f"Error fetching locations: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch locations"
        )

@router.get("/user", response_model=List[LocationResponse])
@router.get("/user/{user_id}", response_model=List[LocationResponse])
async def get_user_locations(
    user_id: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        location_service = LocationService(db)
        return await location_service.get_user_locations(user_id or current_user.id)
    except Exception as e:
        logger.error(f"Error fetching user locations: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user locations"
        )

@router.get("/{location_id}", response_model=LocationResponse)
async def get_location(
    location_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        location_service = LocationService(db)
        location = await location_service.get_location(location_id)

        if not location:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Location not found"
            )

        return location
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Get location error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch location"
        )

@router.delete("/{location_id}")
async def delete_location(
    location_id: str,
    current_user: User = Depends(get_current_user),
    admin_policy: AdminPolicy = Depends(get_admin_policy),
    db: AsyncSession = Depends(get_db)
):
    """Delete a pin; posts and videos tagged with it keep existing untagged"""
    try:
        location_service = LocationService(db)

        if admin_policy.is_admin(current_user.email):
            deleted = await location_service.delete_location_admin(location_id)
        else:
            deleted = await location_service.delete_location(location_id, current_user.id)

        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Location not found or unauthorized"
            )

        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Delete location error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete location"
        )
