"""
Health repository.
Round-trips a trivial query on one database connection.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError


class HealthRepository:
    """Repository for health check operations."""
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def check_database(self) -> Optional[str]:
        """
        Run SELECT 1 on the session's connection.
        
        Returns:
            None if the database answered, otherwise the failure reason
        """
        try:
            result = await self.session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            return f"{type(e).__name__}: {e}"
        if result.scalar() != 1:
            return "unexpected result"
        return None
