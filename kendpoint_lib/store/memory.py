"""In-memory context store for tests and short-lived processes."""

import copy
import logging

from kendpoint_lib.any.exceptions import KEndpointNotFoundError
from kendpoint_lib.store.records import ContextMetadata, EndpointTLSData, StoreConfig, check_tls_file_names

LOGGER = logging.getLogger(__name__)


class MemoryContextStore:
    """
    Context store backed by plain dicts.

    Metadata is kept in its encoded (JSON-compatible) form and decoded on every
    read, so it goes through the same conversion as FileContextStore.

    Example:
    -------
        ```python
        store = MemoryContextStore(get_store_config())
        persist(store, store, endpoint, "dev")
        endpoint = hydrate(store, store, "dev")
        ```

    """

    def __init__(self, config: StoreConfig | None = None):
        self._config = config or StoreConfig()
        self._metadata: dict[str, dict] = {}
        self._tls: dict[str, dict[str, dict[str, bytes]]] = {}

    def create_or_update(self, metadata: ContextMetadata) -> None:
        self._metadata[metadata.name] = copy.deepcopy(self._config.encode(metadata))
        LOGGER.debug(f"Stored metadata for context '{metadata.name}' in memory")

    def get_metadata(self, name: str) -> ContextMetadata:
        if name not in self._metadata:
            raise KEndpointNotFoundError(f"Context '{name}' not found in memory store")
        return self._config.decode(copy.deepcopy(self._metadata[name]))

    def list_names(self) -> list[str]:
        return sorted(self._metadata)

    def remove(self, name: str) -> None:
        if name not in self._metadata:
            raise KEndpointNotFoundError(f"Context '{name}' not found in memory store")
        del self._metadata[name]
        self._tls.pop(name, None)

    def reset_endpoint_tls_material(self, name: str, endpoint_type: str, data: EndpointTLSData | None) -> None:
        if data is not None:
            check_tls_file_names(data.files)
        endpoints = self._tls.get(name, {})
        endpoints.pop(endpoint_type, None)
        if data is not None:
            # An empty dict marks a present slot with no files
            endpoints[endpoint_type] = dict(data.files)
        if endpoints:
            self._tls[name] = endpoints
        else:
            self._tls.pop(name, None)
        LOGGER.debug(
            f"Reset TLS material for context '{name}' endpoint '{endpoint_type}' "
            f"(files: {None if data is None else sorted(data.files)})"
        )

    def get_endpoint_tls_material(self, name: str, endpoint_type: str) -> EndpointTLSData | None:
        files = self._tls.get(name, {}).get(endpoint_type)
        if files is None:
            return None
        return EndpointTLSData(files=dict(files))

    def __repr__(self) -> str:
        """String representation."""
        return f"MemoryContextStore(contexts={len(self._metadata)})"
