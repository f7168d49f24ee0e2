"""
Request objects handed to controllers, built from the incoming HTTP request.
"""

import re
from typing import Dict, List, Optional
from fastapi import HTTPException, Request, status
from pydantic import BaseModel, ConfigDict

from resource_api.core.config import settings
from resource_api.schemas.resource import QueryParameters, ResourceDocument, ResourceObject

FILTER_PARAMETER = re.compile(r"^filter\[(?P<name>[A-Za-z0-9_]+)\]$")


class JsonApiRequest(BaseModel):
    """Resource type and search parameters of an index request."""
    model_config = ConfigDict(frozen=True)
    
    resource_type: str
    parameters: QueryParameters


def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _positive_int(name: str, value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number < 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Query parameter {name} must be a positive integer.",
        )
    return number


def parse_query_parameters(request: Request) -> QueryParameters:
    """Read filter[...], sort and page[...] from the query string."""
    query = request.query_params
    filters: Dict[str, str] = {}
    for key, value in query.items():
        match = FILTER_PARAMETER.match(key)
        if match:
            filters[match.group("name")] = value
    
    page_size = _positive_int("page[size]", query.get("page[size]"))
    if page_size is not None and page_size > settings.MAX_PAGE_SIZE:
        page_size = settings.MAX_PAGE_SIZE
    
    return QueryParameters(
        filters=filters,
        sort=_split(query.get("sort")),
        page_number=_positive_int("page[number]", query.get("page[number]")) or 1,
        page_size=page_size,
    )


def index_request(resource_type: str):
    """Dependency factory building the JsonApiRequest for a resource type."""
    def dependency(request: Request) -> JsonApiRequest:
        return JsonApiRequest(
            resource_type=resource_type,
            parameters=parse_query_parameters(request),
        )
    return dependency


def resource_from_document(
    document: ResourceDocument,
    resource_type: str,
    resource_id: Optional[str] = None,
) -> ResourceObject:
    """
    Check the document's primary data against the route.
    
    Raises:
        HTTPException: 409 if the type, or the id on update, does not match
    """
    resource = document.data
    if resource.type != resource_type:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Resource type {resource.type} does not match endpoint type {resource_type}.",
        )
    if resource_id is not None and resource.id != resource_id:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Resource id {resource.id} does not match endpoint id {resource_id}.",
        )
    return resource


def api_base_url(request: Request) -> str:
    """Absolute URL of the API root for links."""
    return str(request.base_url).rstrip("/") + settings.API_V1_PREFIX
