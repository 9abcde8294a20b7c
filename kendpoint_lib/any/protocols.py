"""
Protocol definitions for KEndpoint.

These protocols define the contracts that context stores must implement.
Endpoint persistence only ever talks to stores through these protocols, so any
backend (file, memory, remote) can be injected.

All protocols follow PEP 544 (Structural Subtyping / Protocol).
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from kendpoint_lib.store.records import ContextMetadata, EndpointTLSData


@runtime_checkable
class MetadataStore(Protocol):
    """
    Protocol for the non-secret half of a context store.

    Implementations:
    - store/memory.py - MemoryContextStore
    - store/file.py - FileContextStore
    """

    def create_or_update(self, metadata: "ContextMetadata") -> None:
        """
        Create or overwrite the metadata record named ``metadata.name``.

        Raises
        ------
            KEndpointIOError: If the record cannot be written

        """
        ...

    def get_metadata(self, name: str) -> "ContextMetadata":
        """
        Get the metadata record for a context.

        Args:
        ----
            name: Context name

        Returns:
        -------
            ContextMetadata with endpoints decoded through the store config

        Raises:
        ------
            KEndpointNotFoundError: If no record exists for ``name``
            KEndpointParseError: If the stored record is corrupt

        """
        ...


@runtime_checkable
class TLSMaterialStore(Protocol):
    """
    Protocol for the secret half of a context store.

    TLS blobs are opaque byte sequences addressed by (context name, endpoint type,
    file name).

    Implementations:
    - store/memory.py - MemoryContextStore
    - store/file.py - FileContextStore
    """

    def reset_endpoint_tls_material(
        self, name: str, endpoint_type: str, data: "EndpointTLSData | None"
    ) -> None:
        """
        Replace all TLS material of one endpoint.

        Args:
        ----
            name: Context name
            endpoint_type: Endpoint type tag (e.g., "kubernetes")
            data: New TLS files (no files marks the slot present but empty),
                or None to reset the slot to absent

        Raises:
        ------
            ValueError: If a file name is not one of ca.pem, cert.pem, key.pem

        """
        ...

    def get_endpoint_tls_material(self, name: str, endpoint_type: str) -> "EndpointTLSData | None":
        """
        Read all TLS material of one endpoint.

        Returns:
        -------
            EndpointTLSData, or None when the slot is absent or was never written

        """
        ...


@runtime_checkable
class ContextStore(MetadataStore, TLSMaterialStore, Protocol):
    """A store that holds both halves of a context and can enumerate and remove them."""

    def list_names(self) -> list[str]:
        """List all stored context names, sorted."""
        ...

    def remove(self, name: str) -> None:
        """
        Remove a context's metadata and TLS material.

        Raises
        ------
            KEndpointNotFoundError: If no record exists for ``name``

        """
        ...
