"""
Post controller.
"""

from typing import Any
from fastapi import status

from resource_api.controllers.jsonapi_controller import JsonApiController
from resource_api.core.exceptions import AppException
from resource_api.core.logging import get_logger
from resource_api.db.repositories.comment_repository import CommentRepository
from resource_api.db.repositories.post_repository import PostRepository
from resource_api.models.post import Post
from resource_api.schemas.post import PostAttributes
from resource_api.schemas.resource import ResourceObject

logger = get_logger(__name__)


class PostController(JsonApiController):
    """Controller for post resources."""
    
    resource_type = "posts"
    attributes_schema = PostAttributes
    hydrator = "post_hydrator"
    
    async def destroy_record(self, record: Post) -> bool:
        repo = PostRepository(self.connections.session(self.connection))
        return await repo.delete(record)
    
    async def updating(self, resource: ResourceObject, record: Post) -> None:
        """Published posts keep their slug so existing links stay valid."""
        slug = resource.attributes.get("slug")
        if record.published and slug is not None and slug != record.slug:
            raise AppException(
                "The slug of a published post cannot be changed.",
                status_code=status.HTTP_409_CONFLICT,
            )
    
    async def deleting(self, record: Post) -> None:
        repo = CommentRepository(self.connections.session(self.connection))
        comments = await repo.count_by_post(record.id)
        if comments:
            logger.info(
                "Deleting post with comments",
                extra={"post_id": str(record.id), "comments": comments},
            )
