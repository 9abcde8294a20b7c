"""Context stores: record shapes plus in-memory and file-backed implementations."""

from kendpoint_lib.store.file import FileContextStore
from kendpoint_lib.store.memory import MemoryContextStore
from kendpoint_lib.store.records import ContextMetadata, EndpointTLSData, StoreConfig

__all__ = [
    "ContextMetadata",
    "EndpointTLSData",
    "StoreConfig",
    "FileContextStore",
    "MemoryContextStore",
]
