"""
Transaction management for controller mutations.
Runs a unit of work inside a transaction on a named database connection.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Dict, Optional, TypeVar
from sqlalchemy.ext.asyncio import AsyncSession

from resource_api.core.logging import get_logger
from resource_api.db.session import ConnectionScope

logger = get_logger(__name__)

T = TypeVar("T")


class TransactionManager(ABC):
    """Runs a closure inside a transaction scope."""
    
    @abstractmethod
    async def run_in_transaction(
        self,
        connection: Optional[str],
        closure: Callable[[], Awaitable[T]],
    ) -> T:
        """
        Run the closure atomically.
        
        Args:
            connection: Connection name, or None for the default connection
            closure: Zero-argument coroutine function doing the work
            
        Returns:
            Whatever the closure returns. The transaction commits when the
            closure returns and rolls back if it raises.
        """


class DatabaseTransactionManager(TransactionManager):
    """Transaction manager over the sessions of a request's connection scope."""
    
    def __init__(self, connections: ConnectionScope):
        self.connections = connections
        self._depth: Dict[AsyncSession, int] = {}
    
    async def run_in_transaction(
        self,
        connection: Optional[str],
        closure: Callable[[], Awaitable[T]],
    ) -> T:
        session = self.connections.session(connection)
        
        # Inside another unit of work: nest with a SAVEPOINT.
        if session.in_nested_transaction() or self._depth.get(session, 0):
            transaction = session.begin_nested()
        else:
            # End the transaction autobegun by earlier reads (e.g. binding the
            # route record) so the work below commits before this returns.
            if session.in_transaction():
                await session.commit()
            transaction = session.begin()
        
        self._depth[session] = self._depth.get(session, 0) + 1
        
        try:
            async with transaction:
                return await closure()
        except Exception as exc:
            logger.warning(
                "Transaction rolled back",
                extra={
                    "connection": connection or self.connections.manager.default,
                    "exception_type": type(exc).__name__,
                },
            )
            raise
        finally:
            self._depth[session] -= 1
