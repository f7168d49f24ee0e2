"""
Health controller.
Maps the connection checks onto the HTTP status of the health endpoint.
"""

from fastapi import Response, status

from resource_api.controllers.base_controller import BaseController
from resource_api.schemas.health import HealthResponse
from resource_api.services.health_service import HealthService


class HealthController(BaseController):
    """Controller for health check operations."""
    
    def __init__(self, health_service: HealthService = None):
        self.health_service = health_service or HealthService()
    
    async def get_health(self, response: Response) -> HealthResponse:
        """
        Check every database connection.
        
        A degraded result is served as 503 so load balancers take the
        instance out of rotation; the body still lists each check.
        """
        health = await self.health_service.get_health()
        if health.status != "ok":
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return health
