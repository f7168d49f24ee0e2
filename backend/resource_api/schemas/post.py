"""
Post Pydantic schemas for attribute validation and encoding.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class PostCreate(BaseModel):
    """Attributes accepted when creating a post."""
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    content: str = ""
    published: bool = False


class PostUpdate(BaseModel):
    """Attributes accepted when updating a post."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    content: Optional[str] = None
    published: Optional[bool] = None


class PostAttributes(BaseModel):
    """Attributes of an encoded post resource."""
    model_config = ConfigDict(from_attributes=True)
    
    title: str
    slug: str
    content: str
    published: bool
    created_at: Optional[datetime] = None
