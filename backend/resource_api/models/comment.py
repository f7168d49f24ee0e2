"""
Comment model for post comments.
"""

from sqlalchemy import Column, Text, ForeignKey, DateTime, Uuid, func
from sqlalchemy.orm import relationship
import uuid

from resource_api.db.base import Base


class Comment(Base):
    """Comment model (many-to-one with Post)."""
    
    __tablename__ = "comments"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    post_id = Column(Uuid, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    
    # Relationships
    post = relationship("Post", back_populates="comments")
