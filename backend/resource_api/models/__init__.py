"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from resource_api.models.post import Post
from resource_api.models.comment import Comment

__all__ = [
    "Post",
    "Comment",
]
