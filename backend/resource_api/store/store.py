"""
Store: resolves a resource type to its repository and runs queries.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from resource_api.core.exceptions import JsonApiRuntimeError
from resource_api.core.logging import get_logger
from resource_api.db.repositories.base_repository import BaseRepository
from resource_api.db.session import ConnectionScope
from resource_api.schemas.resource import QueryParameters

logger = get_logger(__name__)

RepositoryFactory = Callable[[AsyncSession], BaseRepository]


class Store:
    """Query execution for all registered resource types."""
    
    def __init__(
        self,
        connections: ConnectionScope,
        adapters: Optional[Dict[str, RepositoryFactory]] = None,
        default_page_size: int = 50,
        max_page_size: int = 500,
    ):
        self.connections = connections
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        self._adapters: Dict[str, Tuple[RepositoryFactory, Optional[str]]] = {}
        for resource_type, factory in (adapters or {}).items():
            self.register(resource_type, factory)
    
    def register(
        self,
        resource_type: str,
        repository_factory: RepositoryFactory,
        connection: Optional[str] = None,
    ) -> None:
        """Register the repository serving a resource type."""
        self._adapters[resource_type] = (repository_factory, connection)
    
    def repository(self, resource_type: str) -> BaseRepository:
        if resource_type not in self._adapters:
            raise JsonApiRuntimeError(f"No adapter for resource type {resource_type}.")
        factory, connection = self._adapters[resource_type]
        return factory(self.connections.session(connection))
    
    async def query(self, resource_type: str, parameters: QueryParameters) -> List[Any]:
        """Run a search for a resource type."""
        logger.debug(
            "Querying resources",
            extra={"resource_type": resource_type, "filters": parameters.filters},
        )
        return await self.repository(resource_type).query(
            parameters,
            default_page_size=self.default_page_size,
            max_page_size=self.max_page_size,
        )
    
    async def find(self, resource_type: str, resource_id: Any) -> Optional[Any]:
        """Get one record by id, or None."""
        return await self.repository(resource_type).get(resource_id)
