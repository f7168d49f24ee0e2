"""
Database connection management with async SQLAlchemy 2.0.
Holds one engine per named connection and hands out request-scoped sessions.
"""

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from typing import AsyncGenerator, Dict, List, Optional

from resource_api.core.config import settings
from resource_api.core.exceptions import JsonApiRuntimeError
from resource_api.core.logging import get_logger

logger = get_logger(__name__)


def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """Let SQLAlchemy emit BEGIN itself so SAVEPOINT works with pysqlite/aiosqlite."""
    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_engine(url: str) -> AsyncEngine:
    """Create an async SQLAlchemy engine with connection pooling."""
    backend = make_url(url).get_backend_name()
    
    if backend == "sqlite":
        engine = create_async_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        _enable_sqlite_savepoints(engine)
    else:
        engine = create_async_engine(
            url,
            echo=False,
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_pre_ping=True,  # Verify connections before using
        )
    
    logger.info("Database engine created", extra={"backend": backend})
    return engine


class ConnectionManager:
    """Named database connections and their sessionmakers."""
    
    def __init__(self, urls: Dict[str, str], default: str = "default"):
        if default not in urls:
            raise JsonApiRuntimeError(f"Default connection {default} is not configured.")
        self.default = default
        self._urls = dict(urls)
        self._engines: Dict[str, AsyncEngine] = {}
        self._sessionmakers: Dict[str, async_sessionmaker[AsyncSession]] = {}
    
    def names(self) -> List[str]:
        """Configured connection names, default first."""
        return [self.default] + sorted(n for n in self._urls if n != self.default)
    
    def resolve_name(self, name: Optional[str] = None) -> str:
        name = name or self.default
        if name not in self._urls:
            raise JsonApiRuntimeError(f"Database connection {name} is not configured.")
        return name
    
    def engine(self, name: Optional[str] = None) -> AsyncEngine:
        """Get (creating on first use) the engine for a connection."""
        name = self.resolve_name(name)
        if name not in self._engines:
            self._engines[name] = create_engine(self._urls[name])
        return self._engines[name]
    
    def sessionmaker(self, name: Optional[str] = None) -> async_sessionmaker[AsyncSession]:
        """Get the sessionmaker for a connection."""
        name = self.resolve_name(name)
        if name not in self._sessionmakers:
            self._sessionmakers[name] = async_sessionmaker(
                self.engine(name),
                class_=AsyncSession,
                expire_on_commit=False,
            )
            logger.info("Sessionmaker created", extra={"connection": name})
        return self._sessionmakers[name]
    
    async def dispose(self) -> None:
        """Close all pooled connections."""
        for name, engine in self._engines.items():
            await engine.dispose()
            logger.info("Database connections closed", extra={"connection": name})
        self._engines.clear()
        self._sessionmakers.clear()


class ConnectionScope:
    """
    Sessions opened during a single request, one per connection name.
    
    Sessions are created lazily so a request only touches the connections
    its controller and hydrator actually use.
    """
    
    def __init__(self, manager: ConnectionManager):
        self.manager = manager
        self._sessions: Dict[str, AsyncSession] = {}
    
    def session(self, name: Optional[str] = None) -> AsyncSession:
        """Get the request's session for a connection (default if name is None)."""
        name = self.manager.resolve_name(name)
        if name not in self._sessions:
            self._sessions[name] = self.manager.sessionmaker(name)()
        return self._sessions[name]
    
    async def commit(self) -> None:
        for session in self._sessions.values():
            await session.commit()
    
    async def rollback(self) -> None:
        for session in self._sessions.values():
            await session.rollback()
    
    async def close(self) -> None:
        for session in self._sessions.values():
            await session.close()
        self._sessions.clear()


# Global connection manager
connection_manager: Optional[ConnectionManager] = None


def get_connection_manager() -> ConnectionManager:
    """Get the global connection manager, building it from settings on first use."""
    global connection_manager
    
    if connection_manager is None:
        urls = {settings.DEFAULT_CONNECTION: settings.DATABASE_URL}
        urls.update(settings.DATABASE_CONNECTIONS)
        connection_manager = ConnectionManager(urls, default=settings.DEFAULT_CONNECTION)
    return connection_manager


async def get_connections() -> AsyncGenerator[ConnectionScope, None]:
    """
    Dependency for getting the request's connection scope.
    Commits every opened session on success and rolls back on error.
    """
    scope = ConnectionScope(get_connection_manager())
    try:
        yield scope
        await scope.commit()
    except Exception:
        await scope.rollback()
        raise
    finally:
        await scope.close()


async def init_db() -> None:
    """Initialize the default database connection."""
    get_connection_manager().sessionmaker()
    logger.info("Database initialized")


async def create_tables(name: Optional[str] = None) -> None:
    """Create all model tables on a connection (development and tests)."""
    from resource_api.db.base import Base
    import resource_api.models  # noqa: F401  registers the models on Base.metadata
    
    async with get_connection_manager().engine(name).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections."""
    global connection_manager
    
    if connection_manager:
        await connection_manager.dispose()
