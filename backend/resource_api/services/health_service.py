"""
Health service.
Checks every configured database connection.
"""

import time
from resource_api.core.logging import get_logger
from resource_api.db.repositories.health_repository import HealthRepository
from resource_api.db.session import ConnectionManager, get_connection_manager
from resource_api.schemas.health import HealthResponse
from resource_api.services.base_service import BaseService

logger = get_logger(__name__)


class HealthService(BaseService):
    """Service for health check operations."""
    
    def __init__(self):
        self.start_time = time.time()
    
    async def get_health(self) -> HealthResponse:
        """
        Get system health status.
        
        Returns:
            HealthResponse with status, uptime, and one check per connection
        """
        uptime_seconds = int(time.time() - self.start_time)
        uptime_str = f"PT{uptime_seconds}S"  # ISO 8601 duration format
        
        manager = get_connection_manager()
        checks = {
            f"database.{name}": await self._check_connection(manager, name)
            for name in manager.names()
        }
        
        status = "ok" if all(check == "ok" for check in checks.values()) else "degraded"
        
        return HealthResponse(
            status=status,
            uptime=uptime_str,
            checks=checks,
        )
    
    async def _check_connection(self, manager: ConnectionManager, name: str) -> str:
        # Engine creation itself fails for a bad URL or a missing driver
        try:
            async with manager.sessionmaker(name)() as session:
                error = await HealthRepository(session=session).check_database()
        except Exception as e:
            error = f"{type(e).__name__}: {e}"
        
        if error is None:
            return "ok"
        logger.warning(
            "Database health check failed",
            extra={"connection": name, "error": error},
        )
        return f"error: {error}"
