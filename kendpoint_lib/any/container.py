"""
Dependency injection container for KEndpoint.

This container wires the context store selected by configuration (file or memory).
Uses dependency-injector for clean DI with singletons.
"""

from dependency_injector import containers, providers

from kendpoint_lib.any.protocols import ContextStore
from kendpoint_lib.config.settings import default_store_root, store_backend
from kendpoint_lib.context.endpoint import KUBERNETES_ENDPOINT, EndpointMeta
from kendpoint_lib.store.file import FileContextStore
from kendpoint_lib.store.memory import MemoryContextStore
from kendpoint_lib.store.records import StoreConfig


def _store_selector() -> str:
    """Return 'file' or 'memory' based on KENDPOINT_STORE for the Selector provider."""
    return store_backend()


def default_store_config() -> StoreConfig:
    """Store config that decodes kubernetes endpoints into EndpointMeta."""
    return StoreConfig({KUBERNETES_ENDPOINT: EndpointMeta})


class KEndpointIoCContainer(containers.DeclarativeContainer):
    """
    Inversion of Control (IoC) container for KEndpoint.

    Example:
    -------
        ```python
        from kendpoint_lib.any.container import KEndpointIoCContainer

        container = KEndpointIoCContainer()
        store = container.context_store()
        persist(store, store, endpoint, "prod")
        ```

    """

    # Singleton: endpoint type → model registry shared by all stores
    store_config = providers.Singleton(default_store_config)

    # Singleton: context store, FileContextStore or MemoryContextStore
    context_store = providers.Singleton(
        providers.Selector(
            _store_selector,
            file=providers.Factory(
                FileContextStore,
                root=providers.Callable(default_store_root),
                config=store_config,
            ),
            memory=providers.Factory(MemoryContextStore, config=store_config),
        )
    )


# Global singleton container instance
container = KEndpointIoCContainer()


def get_store_config() -> StoreConfig:
    """Get the shared store config (singleton)."""
    return container.store_config()


def get_context_store() -> ContextStore:
    """
    Get the configured context store (singleton).

    Returns:
    -------
        ContextStore implementation (file or memory)

    Example:
    -------
        ```python
        from kendpoint_lib.any.container import get_context_store

        store = get_context_store()
        endpoint = hydrate(store, store, "prod")
        ```

    """
    return container.context_store()
