"""
Dependency injection container using dependency-injector.
Wires the store, hydrators and health controller.

Hydrator providers are looked up by name, so a controller can reference one
with a plain service identifier such as ``"post_hydrator"``.
"""

from dependency_injector import containers, providers

from resource_api.controllers.health_controller import HealthController
from resource_api.core.config import settings
from resource_api.db.repositories.comment_repository import CommentRepository
from resource_api.db.repositories.post_repository import PostRepository
from resource_api.hydrators.comment_hydrator import CommentHydrator
from resource_api.hydrators.post_hydrator import PostHydrator
from resource_api.services.health_service import HealthService
from resource_api.store.store import Store


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""
    
    # Configuration
    config = providers.Configuration()
    
    # Store; the request's connection scope is passed at call time
    store = providers.Factory(
        Store,
        adapters=providers.Dict(
            posts=PostRepository,
            comments=CommentRepository,
        ),
        default_page_size=config.default_page_size,
        max_page_size=config.max_page_size,
    )
    
    # Hydrators; called with connections=<ConnectionScope>
    post_hydrator = providers.Factory(PostHydrator)
    comment_hydrator = providers.Factory(CommentHydrator)
    
    # Services
    health_service = providers.Singleton(
        HealthService,
    )
    
    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )


def container_config() -> dict:
    """Container configuration taken from application settings."""
    return {
        "default_page_size": settings.DEFAULT_PAGE_SIZE,
        "max_page_size": settings.MAX_PAGE_SIZE,
    }


# Global container instance
_container: Container = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = Container()
        _container.config.from_dict(container_config())
    return _container
