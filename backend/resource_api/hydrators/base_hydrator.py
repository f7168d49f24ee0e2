"""
Hydrators map a JSON:API resource object onto a persisted domain record.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import IntegrityError
from fastapi import status
import uuid

from resource_api.core.exceptions import AppException
from resource_api.db.base import Base
from resource_api.db.repositories.base_repository import BaseRepository
from resource_api.db.session import ConnectionScope
from resource_api.schemas.resource import ResourceObject

ModelType = TypeVar("ModelType", bound=Base)


class Hydrator(ABC):
    """Creates and updates records from resource objects."""
    
    @abstractmethod
    async def create(self, resource: ResourceObject) -> Any:
        """Persist a new record built from the resource and return it."""
    
    @abstractmethod
    async def update(self, resource: ResourceObject, record: Any) -> Any:
        """Apply the resource to an existing record and return the record."""


class ModelHydrator(Hydrator, Generic[ModelType]):
    """
    Hydrator for SQLAlchemy models.
    
    Attributes are validated against ``create_schema`` / ``update_schema``
    and written through the repository on the hydrator's connection.
    Subclasses add relationship handling by overriding
    ``hydrate_relationships``.
    """
    
    repository_class: Type[BaseRepository] = None
    create_schema: Type[BaseModel] = None
    update_schema: Type[BaseModel] = None
    connection: Optional[str] = None
    
    def __init__(self, connections: ConnectionScope):
        self.connections = connections
    
    @property
    def session(self):
        return self.connections.session(self.connection)
    
    @property
    def repository(self) -> BaseRepository:
        return self.repository_class(self.session)
    
    async def create(self, resource: ResourceObject) -> ModelType:
        values = self._validate(self.create_schema, resource.attributes)
        if resource.id is not None:
            values["id"] = self._client_id(resource.id)
        values.update(await self.hydrate_relationships(resource, None))
        values = await self.creating(values)
        try:
            return await self.repository.create(**values)
        except IntegrityError as e:
            raise self._conflict(e) from e
    
    async def update(self, resource: ResourceObject, record: ModelType) -> ModelType:
        values = self._validate(self.update_schema, resource.attributes, partial=True)
        values.update(await self.hydrate_relationships(resource, record))
        try:
            return await self.repository.update(record, **values)
        except IntegrityError as e:
            raise self._conflict(e) from e
    
    async def hydrate_relationships(
        self,
        resource: ResourceObject,
        record: Optional[ModelType],
    ) -> Dict[str, Any]:
        """Column values derived from the resource's relationships."""
        return {}
    
    async def creating(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Adjust column values before a new record is inserted."""
        return values
    
    @staticmethod
    def _validate(schema: Type[BaseModel], attributes: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
        try:
            validated = schema.model_validate(attributes)
        except ValidationError as e:
            raise AppException(
                "Unprocessable Entity",
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                details=e.errors(include_url=False, include_context=False),
            )
        return validated.model_dump(exclude_unset=partial)
    
    @staticmethod
    def _conflict(error: IntegrityError) -> AppException:
        return AppException(
            "The resource conflicts with an existing record.",
            status_code=status.HTTP_409_CONFLICT,
            details=str(error.orig),
        )
    
    @staticmethod
    def _client_id(value: str) -> uuid.UUID:
        try:
            return uuid.UUID(value)
        except ValueError:
            raise AppException(
                f"Client-generated id {value} is not a valid UUID.",
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )
