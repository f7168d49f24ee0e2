"""
JSON:API resource schemas for request bodies and query parameters.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Union


class ResourceIdentifier(BaseModel):
    """Resource identifier object (type + id)."""
    type: str = Field(..., min_length=1)
    id: str = Field(..., min_length=1)


class Relationship(BaseModel):
    """Relationship object; to-one, to-many or empty."""
    data: Optional[Union[ResourceIdentifier, List[ResourceIdentifier]]] = None


class ResourceObject(BaseModel):
    """The primary data of a create or update request."""
    model_config = ConfigDict(frozen=True)
    
    type: str = Field(..., min_length=1)
    id: Optional[str] = None
    attributes: Dict[str, Any] = {}
    relationships: Dict[str, Relationship] = {}
    
    def related_id(self, name: str) -> Optional[str]:
        """Id of a to-one relationship, or None if absent or empty."""
        relationship = self.relationships.get(name)
        if relationship is None or not isinstance(relationship.data, ResourceIdentifier):
            return None
        return relationship.data.id


class ResourceDocument(BaseModel):
    """Top-level request document."""
    data: ResourceObject


class QueryParameters(BaseModel):
    """Search parameters for an index request."""
    model_config = ConfigDict(frozen=True)
    
    filters: Dict[str, str] = {}
    sort: List[str] = []
    page_number: int = Field(1, ge=1)
    page_size: Optional[int] = Field(None, ge=1)
