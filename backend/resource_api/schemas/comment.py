"""
Comment Pydantic schemas.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class CommentCreate(BaseModel):
    body: str = Field(..., min_length=1)


class CommentUpdate(BaseModel):
    body: Optional[str] = Field(None, min_length=1)


class CommentAttributes(BaseModel):
    """Attributes of an encoded comment resource."""
    model_config = ConfigDict(from_attributes=True)
    
    body: str
    created_at: Optional[datetime] = None
