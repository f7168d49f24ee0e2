"""
Post repository for database operations.
"""

from typing import Set
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from resource_api.db.repositories.base_repository import BaseRepository
from resource_api.models.post import Post


class PostRepository(BaseRepository[Post]):
    """Repository for post operations."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(Post, session)
    
    async def slugs_with_prefix(self, prefix: str) -> Set[str]:
        """Slugs equal to the prefix or starting with "<prefix>-"."""
        result = await self.session.execute(
            select(Post.slug).where(
                (Post.slug == prefix) | Post.slug.like(f"{prefix}-%")
            )
        )
        return set(result.scalars().all())
