"""
Comment controller.
"""

from resource_api.controllers.jsonapi_controller import JsonApiController
from resource_api.db.repositories.comment_repository import CommentRepository
from resource_api.hydrators.comment_hydrator import CommentHydrator
from resource_api.models.comment import Comment
from resource_api.schemas.comment import CommentAttributes


class CommentController(JsonApiController):
    """Controller for comment resources."""
    
    resource_type = "comments"
    attributes_schema = CommentAttributes
    
    def __init__(self, connections, **kwargs):
        kwargs.setdefault("hydrator", CommentHydrator(connections))
        super().__init__(connections, **kwargs)
    
    async def destroy_record(self, record: Comment) -> bool:
        repo = CommentRepository(self.connections.session(self.connection))
        return await repo.delete(record)
