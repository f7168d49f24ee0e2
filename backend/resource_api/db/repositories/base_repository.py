"""
Base repository class with common CRUD operations.
Repositories handle database access using async SQLAlchemy sessions.
"""

from typing import Any, Generic, TypeVar, Type, Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, Boolean, Integer, Uuid
import uuid

from resource_api.db.base import Base
from resource_api.schemas.resource import QueryParameters

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations."""
    
    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository.
        
        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session
    
    async def create(self, **kwargs) -> ModelType:
        """
        Create a new record.
        
        Args:
            **kwargs: Model attributes
            
        Returns:
            Created model instance
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance
    
    async def get(self, id: Any) -> Optional[ModelType]:
        """
        Get a record by ID.
        
        Args:
            id: Record ID, as stored or as its string form
            
        Returns:
            Model instance or None
        """
        id = self._coerce_value(self.model.__table__.c.id, id)
        if id is None:
            return None
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()
    
    async def query(
        self,
        parameters: QueryParameters,
        default_page_size: int = 50,
        max_page_size: int = 500,
    ) -> List[ModelType]:
        """
        List records matching search parameters.
        
        Filters are equality matches on known columns; unknown filter and
        sort keys are ignored. A sort key prefixed with "-" sorts descending.
        
        Args:
            parameters: Filters, sort fields and page
            default_page_size: Page size when none is requested
            max_page_size: Upper bound on the page size
            
        Returns:
            List of model instances
        """
        columns = self.model.__table__.c
        query = select(self.model)
        
        # Apply filters
        for key, value in parameters.filters.items():
            if key not in columns:
                continue
            coerced = self._coerce_value(columns[key], value)
            if coerced is None:
                return []
            query = query.where(columns[key] == coerced)
        
        # Apply sort
        for field in parameters.sort:
            descending = field.startswith("-")
            name = field.lstrip("-")
            if name not in columns:
                continue
            query = query.order_by(columns[name].desc() if descending else columns[name].asc())
        
        page_size = min(parameters.page_size or default_page_size, max_page_size)
        query = query.offset((parameters.page_number - 1) * page_size).limit(page_size)
        result = await self.session.execute(query)
        return list(result.scalars().all())
    
    async def update(self, instance: ModelType, **kwargs) -> ModelType:
        """
        Update a record.
        
        Args:
            instance: Model instance to change
            **kwargs: Attributes to update
            
        Returns:
            Updated model instance
        """
        for key, value in kwargs.items():
            setattr(instance, key, value)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance
    
    async def delete(self, instance: ModelType) -> bool:
        """
        Delete a record.
        
        Args:
            instance: Model instance to delete
            
        Returns:
            True if deleted, False if it was not persisted
        """
        if instance not in self.session:
            return False
        await self.session.delete(instance)
        await self.session.flush()
        return True
    
    @staticmethod
    def _coerce_value(column, value: Any) -> Any:
        """Convert a string value to the column's Python type, None if it cannot match."""
        if not isinstance(value, str):
            return value
        if isinstance(column.type, Uuid):
            try:
                return uuid.UUID(value)
            except ValueError:
                return None
        if isinstance(column.type, Boolean):
            return value.lower() in ("1", "true", "yes")
        if isinstance(column.type, Integer):
            try:
                return int(value)
            except ValueError:
                return None
        return value
