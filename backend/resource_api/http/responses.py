"""
JSON:API response builder.
Encodes records as resource objects and wraps them in framework responses.
"""

from typing import Any, Optional, Type
from fastapi import Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"


class JsonApiResponse(JSONResponse):
    media_type = JSONAPI_MEDIA_TYPE


class ResourceEncoder:
    """Encodes records of one resource type as JSON:API resource objects."""
    
    def __init__(
        self,
        resource_type: str,
        schema: Type[BaseModel],
        base_url: Optional[str] = None,
    ):
        self.resource_type = resource_type
        self.schema = schema
        self.base_url = base_url.rstrip("/") if base_url else None
    
    def self_link(self, record: Any) -> Optional[str]:
        if not self.base_url:
            return None
        return f"{self.base_url}/{self.resource_type}/{record.id}"
    
    def encode_record(self, record: Any) -> dict:
        resource = {
            "type": self.resource_type,
            "id": str(record.id),
            "attributes": self.schema.model_validate(record).model_dump(mode="json"),
        }
        link = self.self_link(record)
        if link:
            resource["links"] = {"self": link}
        return resource
    
    def encode(self, value: Any) -> Any:
        """Encode a record, a collection of records, or None."""
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return [self.encode_record(record) for record in value]
        return self.encode_record(value)


class Responses:
    """Builds the HTTP response for each controller outcome."""
    
    def __init__(self, encoder: ResourceEncoder):
        self.encoder = encoder
    
    def content(self, value: Any) -> Response:
        """200 with the value as primary data."""
        return JsonApiResponse(
            status_code=status.HTTP_200_OK,
            content={"data": self.encoder.encode(value)},
        )
    
    def created(self, value: Any) -> Response:
        """201 with the new record and, when known, its Location."""
        headers = {}
        location = self.encoder.self_link(value)
        if location:
            headers["Location"] = location
        return JsonApiResponse(
            status_code=status.HTTP_201_CREATED,
            content={"data": self.encoder.encode(value)},
            headers=headers,
        )
    
    def no_content(self) -> Response:
        """204 with no body."""
        return Response(status_code=status.HTTP_204_NO_CONTENT)


class CreatesResponses:
    """
    Mixin giving a controller a ``reply()`` response builder.
    
    The class using it provides ``resource_type``, ``attributes_schema``
    and ``base_url``.
    """
    
    resource_type: str = None
    attributes_schema: Type[BaseModel] = None
    base_url: Optional[str] = None
    
    def reply(self) -> Responses:
        return Responses(
            ResourceEncoder(self.resource_type, self.attributes_schema, self.base_url)
        )
