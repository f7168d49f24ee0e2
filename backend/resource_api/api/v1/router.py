"""
API v1 router that aggregates all endpoint routers.
"""

from fastapi import APIRouter

from resource_api.api.v1.endpoints import (
    health,
    posts,
    comments,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
api_router.include_router(comments.router, prefix="/comments", tags=["comments"])
