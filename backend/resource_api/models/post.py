"""
Post model for published articles.
"""

from sqlalchemy import Column, String, Text, Boolean, DateTime, Uuid, func
from sqlalchemy.orm import relationship
import uuid

from resource_api.db.base import Base


class Post(Base):
    """Post model."""
    
    __tablename__ = "posts"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    content = Column(Text, nullable=False, default="")
    published = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    
    # Relationships
    comments = relationship("Comment", back_populates="post", cascade="all, delete-orphan")
