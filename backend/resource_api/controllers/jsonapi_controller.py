"""
JSON:API resource controller.

Maps the index/read/create/update/delete actions onto a store, a hydrator
and a transaction manager. Concrete controllers set ``resource_type``,
``attributes_schema`` and ``hydrator``, implement ``destroy_record`` and
override whichever lifecycle hooks they need.
"""

from abc import abstractmethod
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union
from dependency_injector import providers
from fastapi import Response

from resource_api.controllers.base_controller import BaseController
from resource_api.core.config import settings
from resource_api.core.exceptions import JsonApiRuntimeError
from resource_api.core.logging import get_logger
from resource_api.db.session import ConnectionScope
from resource_api.db.transactions import DatabaseTransactionManager, TransactionManager
from resource_api.http.requests import JsonApiRequest
from resource_api.http.responses import CreatesResponses
from resource_api.hydrators.base_hydrator import Hydrator
from resource_api.schemas.resource import ResourceObject
from resource_api.store.store import Store

logger = get_logger(__name__)

T = TypeVar("T")


class JsonApiController(CreatesResponses, BaseController):
    """Base controller for a JSON:API resource type."""

    # Hydrator instance, or the name of a hydrator provider in the container
    hydrator: Union[Hydrator, str, None] = None

    # Connection used for transactions; None is the default connection
    connection: Optional[str] = None

    use_transactions: bool = settings.USE_TRANSACTIONS

    def __init__(
        self,
        connections: ConnectionScope,
        transactions: Optional[TransactionManager] = None,
        hydrator: Union[Hydrator, str, None] = None,
        container=None,
        base_url: Optional[str] = None,
    ):
        self.connections = connections
        self.transactions = transactions or DatabaseTransactionManager(connections)
        self.container = container
        self.base_url = base_url
        if hydrator is not None:
            self.hydrator = hydrator
        self._resolved_hydrator: Optional[Hydrator] = None

    @abstractmethod
    async def destroy_record(self, record: Any) -> bool:
        """
        Delete the record.

        Returns:
            Whether the record was successfully deleted
        """

    async def index(self, store: Store, request: JsonApiRequest) -> Response:
        """List records matching the request's search parameters."""
        return self.reply().content(
            await self._do_search(store, request)
        )

    async def read(self, record: Any) -> Response:
        """Return a single record."""
        return self.reply().content(record)

    async def create(self, resource: ResourceObject) -> Response:
        """Create a record from the resource object."""
        record = await self.transaction(lambda: self._do_create(resource))
        logger.info(
            "Resource created",
            extra={"resource_type": self.resource_type, "resource_id": self._record_id(record)},
        )
        return self.reply().created(record)

    async def update(self, resource: ResourceObject, record: Any) -> Response:
        """Apply the resource object to an existing record."""
        record = await self.transaction(lambda: self._do_update(resource, record))
        logger.info(
            "Resource updated",
            extra={"resource_type": self.resource_type, "resource_id": self._record_id(record)},
        )
        return self.reply().content(record)

    async def delete(self, record: Any) -> Response:
        """Delete a record."""
        record_id = self._record_id(record)
        await self.transaction(lambda: self._do_delete(record))
        logger.info(
            "Resource deleted",
            extra={"resource_type": self.resource_type, "resource_id": record_id},
        )
        return self.reply().no_content()

    @staticmethod
    def _record_id(record: Any) -> Optional[str]:
        record_id = getattr(record, "id", None)
        return None if record_id is None else str(record_id)

    async def _do_search(self, store: Store, request: JsonApiRequest) -> Any:
        return await store.query(request.resource_type, request.parameters)

    async def _do_create(self, resource: ResourceObject) -> Any:
        await self.creating(resource)
        record = await self.resolve_hydrator().create(resource)
        await self.created(resource, record)
        return record

    async def _do_update(self, resource: ResourceObject, record: Any) -> Any:
        await self.updating(resource, record)
        record = await self.resolve_hydrator().update(resource, record)
        await self.updated(resource, record)
        return record

    async def _do_delete(self, record: Any) -> None:
        await self.deleting(record)

        if not await self.destroy_record(record):
            raise JsonApiRuntimeError("Record was not successfully deleted.")

        await self.deleted(record)

    async def transaction(self, closure: Callable[[], Awaitable[T]]) -> T:
        """Run a mutation, inside a transaction when transactions are enabled."""
        if not self.use_transactions:
            return await closure()

        return await self.transactions.run_in_transaction(self.connection, closure)

    def resolve_hydrator(self) -> Hydrator:
        """
        Get the hydrator, resolving a service identifier on first use.

        Raises:
            JsonApiRuntimeError: If no hydrator is set, or the named service
                is missing or is not a hydrator
        """
        if isinstance(self.hydrator, Hydrator):
            return self.hydrator

        if not self.hydrator:
            raise JsonApiRuntimeError("The hydrator property must be set.")

        if self._resolved_hydrator is None:
            self._resolved_hydrator = self._make_hydrator(self.hydrator)
        return self._resolved_hydrator

    def _make_hydrator(self, service: str) -> Hydrator:
        if self.container is None:
            from resource_api.deps.di_container import get_container
            self.container = get_container()

        provider = self.container.providers.get(service)
        if not (
            isinstance(provider, providers.Factory)
            and isinstance(provider.provides, type)
            and issubclass(provider.provides, Hydrator)
        ):
            raise JsonApiRuntimeError(f"Service {service} is not a hydrator.")

        return provider(connections=self.connections)

    # Lifecycle hooks. Override in subclasses as needed.

    async def creating(self, resource: ResourceObject) -> None:
        pass

    async def created(self, resource: ResourceObject, record: Any) -> None:
        pass

    async def updating(self, resource: ResourceObject, record: Any) -> None:
        pass

    async def updated(self, resource: ResourceObject, record: Any) -> None:
        pass

    async def deleting(self, record: Any) -> None:
        pass

    async def deleted(self, record: Any) -> None:
        pass
