from fastapi import APIRouter, Depends, HTTPException
import logging

from geosocial.schemas.route_schema import RouteRequest
from geosocial.services.route_service import RouteService, RouteServiceError, get_route_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/route")
async def get_route(
    route_request: RouteRequest,
    route_service: RouteService = Depends(get_route_service)
):
    """Driving directions between two [lng, lat] points, as GeoJSON"""
    try:
        return await route_service.get_driving_route(route_request.start, route_request.end)
    except RouteServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Route error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch route")
