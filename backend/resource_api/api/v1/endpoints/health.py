"""
Health check endpoint.
Returns system status and uptime information.
"""

from fastapi import APIRouter, Response

from resource_api.schemas.health import HealthResponse
from resource_api.deps.di_container import get_container

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def get_health(response: Response) -> HealthResponse:
    """
    Health check endpoint.
    Returns 200 when every database connection answers, 503 otherwise.
    """
    container = get_container()
    controller = container.health_controller()
    return await controller.get_health(response)
