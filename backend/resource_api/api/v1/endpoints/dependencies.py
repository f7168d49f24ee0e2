"""
Shared endpoint dependencies.
"""

from fastapi import Depends

from resource_api.db.session import ConnectionScope, get_connections
from resource_api.deps.di_container import get_container
from resource_api.store.store import Store


def get_store(connections: ConnectionScope = Depends(get_connections)) -> Store:
    """Store bound to the request's connections."""
    return get_container().store(connections=connections)
