"""
Comment API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from uuid import UUID

from resource_api.api.v1.endpoints.dependencies import get_store
from resource_api.controllers.comment_controller import CommentController
from resource_api.db.session import ConnectionScope, get_connections
from resource_api.http.requests import (
    JsonApiRequest,
    api_base_url,
    index_request,
    resource_from_document,
)
from resource_api.models.comment import Comment
from resource_api.schemas.resource import ResourceDocument
from resource_api.store.store import Store

router = APIRouter()

RESOURCE_TYPE = "comments"


def get_controller(
    request: Request,
    connections: ConnectionScope = Depends(get_connections),
) -> CommentController:
    return CommentController(connections, base_url=api_base_url(request))


async def get_comment(
    comment_id: UUID,
    store: Store = Depends(get_store),
) -> Comment:
    """Bind the route id to a comment record."""
    comment = await store.find(RESOURCE_TYPE, comment_id)
    if not comment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found",
        )
    return comment


@router.get("")
async def list_comments(
    jsonapi_request: JsonApiRequest = Depends(index_request(RESOURCE_TYPE)),
    store: Store = Depends(get_store),
    controller: CommentController = Depends(get_controller),
) -> Response:
    """List comments; filter[post_id] narrows to one post."""
    return await controller.index(store, jsonapi_request)


@router.get("/{comment_id}")
async def read_comment(
    comment: Comment = Depends(get_comment),
    controller: CommentController = Depends(get_controller),
) -> Response:
    return await controller.read(comment)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_comment(
    document: ResourceDocument,
    controller: CommentController = Depends(get_controller),
) -> Response:
    resource = resource_from_document(document, RESOURCE_TYPE)
    return await controller.create(resource)


@router.patch("/{comment_id}")
async def update_comment(
    comment_id: UUID,
    document: ResourceDocument,
    comment: Comment = Depends(get_comment),
    controller: CommentController = Depends(get_controller),
) -> Response:
    resource = resource_from_document(document, RESOURCE_TYPE, str(comment_id))
    return await controller.update(resource, comment)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment: Comment = Depends(get_comment),
    controller: CommentController = Depends(get_controller),
) -> Response:
    return await controller.delete(comment)
