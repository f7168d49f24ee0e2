"""
Comment hydrator.
"""

from typing import Any, Dict, Optional
from fastapi import status

from resource_api.core.exceptions import AppException
from resource_api.db.repositories.comment_repository import CommentRepository
from resource_api.db.repositories.post_repository import PostRepository
from resource_api.hydrators.base_hydrator import ModelHydrator
from resource_api.models.comment import Comment
from resource_api.schemas.comment import CommentCreate, CommentUpdate
from resource_api.schemas.resource import ResourceObject


class CommentHydrator(ModelHydrator[Comment]):
    """Hydrator for comment resources; the post relationship is required on create."""
    
    repository_class = CommentRepository
    create_schema = CommentCreate
    update_schema = CommentUpdate
    
    async def hydrate_relationships(
        self,
        resource: ResourceObject,
        record: Optional[Comment],
    ) -> Dict[str, Any]:
        post_id = resource.related_id("post")
        if post_id is None:
            if record is None:
                raise AppException(
                    "The post relationship is required.",
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                )
            return {}
        
        post = await PostRepository(self.session).get(post_id)
        if post is None:
            raise AppException(
                f"Post {post_id} does not exist.",
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )
        return {"post_id": post.id}
