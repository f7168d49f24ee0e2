"""
Post API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from uuid import UUID

from resource_api.api.v1.endpoints.dependencies import get_store
from resource_api.controllers.post_controller import PostController
from resource_api.db.session import ConnectionScope, get_connections
from resource_api.deps.di_container import get_container
from resource_api.http.requests import (
    JsonApiRequest,
    api_base_url,
    index_request,
    resource_from_document,
)
from resource_api.models.post import Post
from resource_api.schemas.resource import ResourceDocument
from resource_api.store.store import Store

router = APIRouter()

RESOURCE_TYPE = "posts"


def get_controller(
    request: Request,
    connections: ConnectionScope = Depends(get_connections),
) -> PostController:
    return PostController(
        connections,
        container=get_container(),
        base_url=api_base_url(request),
    )


async def get_post(
    post_id: UUID,
    store: Store = Depends(get_store),
) -> Post:
    """Bind the route id to a post record."""
    post = await store.find(RESOURCE_TYPE, post_id)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return post


@router.get("")
async def list_posts(
    jsonapi_request: JsonApiRequest = Depends(index_request(RESOURCE_TYPE)),
    store: Store = Depends(get_store),
    controller: PostController = Depends(get_controller),
) -> Response:
    """List posts; supports filter[...], sort and page[...]."""
    return await controller.index(store, jsonapi_request)


@router.get("/{post_id}")
async def read_post(
    post: Post = Depends(get_post),
    controller: PostController = Depends(get_controller),
) -> Response:
    """Get post by ID."""
    return await controller.read(post)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(
    document: ResourceDocument,
    controller: PostController = Depends(get_controller),
) -> Response:
    """Create a new post."""
    resource = resource_from_document(document, RESOURCE_TYPE)
    return await controller.create(resource)


@router.patch("/{post_id}")
async def update_post(
    post_id: UUID,
    document: ResourceDocument,
    post: Post = Depends(get_post),
    controller: PostController = Depends(get_controller),
) -> Response:
    """Update a post."""
    resource = resource_from_document(document, RESOURCE_TYPE, str(post_id))
    return await controller.update(resource, post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post: Post = Depends(get_post),
    controller: PostController = Depends(get_controller),
) -> Response:
    """Delete a post and its comments."""
    return await controller.delete(post)
