"""
Comment repository for database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from resource_api.db.repositories.base_repository import BaseRepository
from resource_api.models.comment import Comment


class CommentRepository(BaseRepository[Comment]):
    """Repository for comment operations."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(Comment, session)
    
    async def count_by_post(self, post_id) -> int:
        """Count comments for a post."""
        result = await self.session.execute(
            select(func.count(Comment.id)).where(Comment.post_id == post_id)
        )
        return result.scalar() or 0
