from typing import Any, Dict, List, Optional
import logging

import httpx

from geosocial.config import settings

logger = logging.getLogger(__name__)

class RouteServiceError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

class RouteService:
    """Proxy for the OpenRouteService driving directions API"""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 15.0,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.transport = transport
        self.timeout = timeout

    async def get_driving_route(self, start: List[float], end: List[float]) -> Dict[str, Any]:
        """Fetch a route between two [lng, lat] points"""
        if not self.api_key:
            raise RouteServiceError(500, "OpenRouteService API key not configured")

        headers = {
            "Accept": "application/json, application/geo+json, application/gpx+xml, img/png; charset=utf-8",
            "Authorization": self.api_key,
            "Content-Type": "application/json; charset=utf-8",
        }

        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            response = await client.post(
                self.base_url,
                headers=headers,
                json={"coordinates": [start, end]},
            )

        if response.is_error:
            logger.error(f"OpenRouteService error {response.status_code}: {response.text}")
            raise RouteServiceError(response.status_code, "Failed to fetch route from OpenRouteService")

        return response.json()

def get_route_service() -> RouteService:
    return RouteService(
        api_key=settings.OPENROUTESERVICE_API_KEY,
        base_url=settings.OPENROUTESERVICE_URL,
    )
