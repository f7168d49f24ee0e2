"""
Post hydrator.
"""

import re
from typing import Any, Dict

from resource_api.db.repositories.post_repository import PostRepository
from resource_api.hydrators.base_hydrator import ModelHydrator
from resource_api.models.post import Post
from resource_api.schemas.post import PostCreate, PostUpdate


def slugify(title: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug or "post"


class PostHydrator(ModelHydrator[Post]):
    """Hydrator for post resources."""
    
    repository_class = PostRepository
    create_schema = PostCreate
    update_schema = PostUpdate
    
    async def creating(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Derive a unique slug from the title when none was sent."""
        if not values.get("slug"):
            base = slugify(values["title"])
            taken = await self.repository.slugs_with_prefix(base)
            slug, suffix = base, 1
            while slug in taken:
                suffix += 1
                slug = f"{base}-{suffix}"
            values["slug"] = slug
        return values
